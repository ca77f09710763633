## Loading of contact surfaces from YAML config files

import os

import numpy as np
import yaml

from .cop_support import CoPSupport
from .utils import CustomLogger, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT

logger = CustomLogger(__name__, GLOBAL_LOG_LEVEL, GLOBAL_LOG_FORMAT).logger


def load_config_file(config_name, path_prefix=''):
    '''
    Load a YAML config file. config_name is either a path to a .yml file or
    the name of a file in <path_prefix>/config/
    '''
    if config_name.endswith('.yml') or config_name.endswith('.yaml'):
        config_path = os.path.join(path_prefix, config_name)
    else:
        config_path = os.path.join(path_prefix, 'config', config_name + ".yml")
    logger.debug("Opening config file "+str(config_path))
    with open(config_path) as f:
        data = yaml.load(f, Loader=yaml.FullLoader)
    return data


def support_from_dict(entry):
    '''
    Build a CoPSupport from a config entry with keys box and R or nsurf
    '''
    box = entry.get('box')
    if 'R' in entry:
        return CoPSupport(R=np.array(entry['R'], dtype=float), box=box)
    if 'nsurf' in entry:
        return CoPSupport(nsurf=np.array(entry['nsurf'], dtype=float), box=box)
    return CoPSupport(box=box)


def load_supports(config_name, path_prefix=''):
    '''
    Returns {contact name : CoPSupport} from the 'contacts' section of a config file
    '''
    config = load_config_file(config_name, path_prefix)
    if not config or 'contacts' not in config:
        raise KeyError("config file "+str(config_name)+" has no 'contacts' section")
    supports = {}
    for name, entry in config['contacts'].items():
        supports[name] = support_from_dict(entry or {})
        logger.debug("Loaded support '"+name+"'\n"+str(supports[name]))
    return supports
