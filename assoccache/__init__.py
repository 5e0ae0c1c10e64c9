from assoccache.cache import (AssociativeCache, CacheLine, CacheError,
                              InvalidConfiguration, InvalidAddress)
from assoccache.scenarios import SCENARIOS
