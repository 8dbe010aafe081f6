from forage.config import get_config_registry
from forage.logger import get_forage_logger, init_logger
from forage.providers import get_provider_registry

__version__ = "0.1.0"

# Package logger; applications call init_logger() to configure output
logger = get_forage_logger()
