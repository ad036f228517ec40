import os.path as osp

import yaml

from paginator.utils.logger import logger


here = osp.dirname(osp.abspath(__file__))

PAGE_VIEW_MODES = ("singlePage", "spread", "autoSpread")


def update_dict(target_dict, new_dict, validate_item=None):
    for key, value in new_dict.items():
        if validate_item:
            validate_item(key, value)
        if key not in target_dict:
            logger.warning("Skipping unexpected key in config: {}".format(key))
            continue
        if isinstance(target_dict[key], dict) and isinstance(value, dict):
            update_dict(target_dict[key], value, validate_item=validate_item)
        else:
            target_dict[key] = value


def get_default_config():
    config_file = osp.join(here, "default_config.yaml")
    with open(config_file) as f:
        config = yaml.safe_load(f)
    return config


def validate_config_item(key, value):
    if key == "zoom" and (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or value <= 0
    ):
        raise ValueError(
            "Unexpected value for config key 'zoom': {}".format(value)
        )
    if key == "page_view_mode" and value not in PAGE_VIEW_MODES:
        raise ValueError(
            "Unexpected value for config key 'page_view_mode': {}".format(value)
        )
    if key == "auto_resize" and not isinstance(value, bool):
        raise ValueError(
            "Unexpected value for config key 'auto_resize': {}".format(value)
        )
    if key == "js_timeout_ms" and (
        isinstance(value, bool) or not isinstance(value, int) or value < 100
    ):
        raise ValueError(
            "Unexpected value for config key 'js_timeout_ms': {}".format(value)
        )


def get_config(config_file_or_yaml=None, config_from_args=None):
    # 1. default config
    config = get_default_config()

    # 2. specified as file or yaml
    if config_file_or_yaml is not None:
        config_from_yaml = yaml.safe_load(config_file_or_yaml)
        if not isinstance(config_from_yaml, dict):
            with open(config_from_yaml) as f:
                logger.info(
                    "Loading config file from: {}".format(config_from_yaml)
                )
                config_from_yaml = yaml.safe_load(f) or {}
        update_dict(
            config, config_from_yaml, validate_item=validate_config_item
        )

    # 3. command line arguments
    if config_from_args is not None:
        update_dict(
            config, config_from_args, validate_item=validate_config_item
        )

    return config
