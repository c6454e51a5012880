###
# In specific ordering for dependency resolution
#
from .base_object import Mbr2dObject  # noqa: F401
from .dict import merge_dict  # noqa: F401
from .configuration import Configurable  # noqa: F401
