from . cop_support import CoPSupport, SupportCorrection, NotARotationError, UNBOUNDED, UP
from . config import load_config_file, load_supports, support_from_dict
