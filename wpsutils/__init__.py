from .exceptions import WpsUtilsError, InvalidWord, NegativeCount, EmptyInput
from .ofilter import Exists, Equals, Predicate, PropertySpec, has_property, get_property, parse_properties, ofilter
from .string_utils import IRREGULAR_PLURALS, get_plural_exceptions, pluralize
from .utils import logger, each
