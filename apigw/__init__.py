# Copyright 2025 Cisco Systems, Inc. and its affiliates
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
API gateway configuration toolkit.
Convenient imports for the configuration pipeline.

This module uses lazy imports so that ``import apigw`` stays cheap; the
pipeline and its dependencies (pydantic, PyYAML) are only loaded when one
of the names below is first accessed.
"""

from typing import Any


__all__ = [
    "ConfigurationCreator",
    "ConfigurationHolder",
    "ConfigurationResult",
    "FileConfiguration",
    "FileConfigurationSource",
    "RuntimeConfiguration",
    "create_configuration",
    "load_config_file",
    "GatewayConfigError",
    "ConfigurationError",
    "ConfigurationValidationError",
]


def __getattr__(name: str) -> Any:
    """
    Lazy import handler that loads modules only when attributes are accessed.
    """
    _import_map = {
        "ConfigurationCreator": ("apigw.configuration", "ConfigurationCreator"),
        "ConfigurationHolder": ("apigw.configuration", "ConfigurationHolder"),
        "ConfigurationResult": ("apigw.configuration", "ConfigurationResult"),
        "FileConfiguration": ("apigw.configuration", "FileConfiguration"),
        "FileConfigurationSource": ("apigw.configuration", "FileConfigurationSource"),
        "RuntimeConfiguration": ("apigw.configuration", "RuntimeConfiguration"),
        "create_configuration": ("apigw.configuration", "create_configuration"),
        "load_config_file": ("apigw.configuration", "load_config_file"),
        "GatewayConfigError": ("apigw.configuration", "GatewayConfigError"),
        "ConfigurationError": ("apigw.configuration", "ConfigurationError"),
        "ConfigurationValidationError": ("apigw.configuration", "ConfigurationValidationError"),
    }

    if name in _import_map:
        module_name, attr_name = _import_map[name]
        import importlib
        module = importlib.import_module(module_name)
        attr = getattr(module, attr_name)
        # Cache it in this module's namespace for future access
        globals()[name] = attr
        return attr

    raise AttributeError(f"module 'apigw' has no attribute '{name}'")
