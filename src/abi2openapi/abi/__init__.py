# flake8: noqa: F401
from .abi import AbiJson
from .typemap import map_type, unique_names, MAX_TYPE_DEPTH
from .validator import validate, unwrap
from .normalizer import normalize
