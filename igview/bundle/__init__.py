from igview.bundle.index import FileIndex
from igview.bundle.loader import load_bundle, load_directory, load_zip

__all__ = ["FileIndex", "load_bundle", "load_directory", "load_zip"]
