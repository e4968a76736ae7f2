"""
Pydantic schemas for the config server payload.

A config server answers ``GET /{application}/{profile}`` with an
environment document listing property sources in precedence order
(the first source wins)::

    {
      "name": "app",
      "profiles": ["default"],
      "label": null,
      "version": "1b2c3d",
      "propertySources": [
        {"name": "app.yml", "source": {"message": "Hello from config!"}}
      ]
    }
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _property_text(value: Any) -> str:
    """Render a JSON property value the way it appears in a properties file."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class PropertySource(BaseModel):
    """A named set of properties, e.g. one configuration file."""

    name: str
    source: Dict[str, Any] = Field(default_factory=dict)


class ConfigEnvironment(BaseModel):
    """Environment document returned by the config server."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    profiles: List[str] = Field(default_factory=list)
    label: Optional[str] = None
    version: Optional[str] = None
    property_sources: List[PropertySource] = Field(default_factory=list, alias="propertySources")

    def flatten(self) -> Dict[str, str]:
        """Merge all property sources into one mapping.

        Sources are applied from last to first so that earlier sources
        override later ones.
        """
        merged: Dict[str, str] = {}
        for property_source in reversed(self.property_sources):
            for key, value in property_source.source.items():
                merged[key] = _property_text(value)
        return merged
