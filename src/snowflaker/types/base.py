"""Base model class for snowflaker models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class SnowflakerBaseModel(BaseModel):
    """Base model for snowflaker models with built-in serialization."""
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,  
        validate_assignment=True
    )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.
        
        Returns:
            Dictionary representation with enums reduced to their values
        """
        return self.model_dump(mode="json", by_alias=False, exclude_none=True)
