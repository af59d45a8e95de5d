from treegen.io.config_loader import ConfigFileSpec, load_config
from treegen.io.errors import LoaderError

__all__ = ["ConfigFileSpec", "LoaderError", "load_config"]
