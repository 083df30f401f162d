import copy
import logging
import os
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

_DEFAULT_VAR = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*):-(.*?)\}')


class ConfigMerger:
    @staticmethod
    def merge(
        base: Dict[str, Any],
        override: Dict[str, Any],
        context_description: str = "ConfigMerge",
    ) -> Dict[str, Any]:
        """
        Merges an 'override' dictionary into a 'base' dictionary.
        - Dictionaries are merged recursively.
        - Other types in override replace values in base (lists included).
        """
        if not isinstance(override, dict):
            logger.warning(
                f"[{context_description}] Override for merge is not a dictionary (type: {type(override)}). "
                f"Returning base."
            )
            return copy.deepcopy(base)

        merged = copy.deepcopy(base)
        for key, override_value in override.items():
            base_value = merged.get(key)
            if isinstance(base_value, dict) and isinstance(override_value, dict):
                merged[key] = ConfigMerger.merge(
                    base_value,
                    override_value,
                    context_description=f"{context_description} -> {key}",
                )
            else:
                if key in merged and base_value != override_value:
                    logger.debug(f"[{context_description}] Overridden key '{key}'")
                merged[key] = copy.deepcopy(override_value)
        return merged


def expand_environment_variables(config: Any) -> Any:
    """Recursively expand ``$VAR``, ``${VAR}`` and ``${VAR:-default}`` in string values."""
    if isinstance(config, dict):
        return {key: expand_environment_variables(value) for key, value in config.items()}
    if isinstance(config, list):
        return [expand_environment_variables(item) for item in config]
    if isinstance(config, str):
        return _expand_env_var_string(config)
    return config


def _expand_env_var_string(value_str: str) -> str:
    def repl_default(match):
        env_val = os.getenv(match.group(1))
        return env_val if env_val is not None else match.group(2)

    expanded_str = os.path.expandvars(_DEFAULT_VAR.sub(repl_default, value_str))
    if expanded_str == value_str and '${' in value_str:
        logger.warning(f"Unresolved environment variable: '{value_str}'")
    return expanded_str
