# Common utilities
from .config_loader import SyncSettings, load_config, load_sync_settings
from .handles import category_handle, generate_handle, slugify
from .log_config import setup_logging
