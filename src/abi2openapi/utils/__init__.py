# flake8: noqa: F401
from .utils import capitalize_first, keccak, function_sig_to_hash
