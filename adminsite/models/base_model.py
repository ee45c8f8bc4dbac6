import inspect
import re
from dataclasses import asdict, is_dataclass
from typing import Dict, Any

class BaseModel:
    """Base class for JSON-shaped payload models."""

    @staticmethod
    def _convert_camel_to_snake(key: str) -> str:
        """Convert camelCase to snake_case."""
        return re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', key).lower()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseModel':
        """Create a model instance from a dictionary."""
        if not isinstance(data, dict):
            return data

        new_data = {cls._convert_camel_to_snake(k): v for k, v in data.items()}

        init_params = inspect.signature(cls.__init__).parameters
        valid_keys = set(init_params) - {'self'}

        filtered_args = {k: v for k, v in new_data.items() if k in valid_keys}
        extra_keys = set(new_data) - valid_keys

        if extra_keys:
            # hacky dynamic import b/c circular otherwise
            from adminsite.logger import logger, ErrorEvent
            logger.log(ErrorEvent(
                error_type="Invalid key in obj init",
                message=f"{cls.__name__}.from_dict() got unexpected keys: {extra_keys}",
                source=cls.__name__,
            ))

        return cls(**filtered_args)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a plain dictionary."""
        if is_dataclass(self):
            return asdict(self)
        return dict(self.__dict__)
