from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field

from dms_console.settings import Settings

_KEYS = {
    "seed_samples": "catalog.seed_samples",
    "date_format": "forms.date_format",
    "placeholder_template": "forms.placeholder_template",
    "log_level": "logging.level",
}


class ConsoleSettings(BaseModel):
    seed_samples: bool = Field(default=True)
    date_format: str = Field(default="%Y-%m-%d")
    placeholder_template: str = Field(default="Enter {name}")
    log_level: str = Field(default="DEBUG")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConsoleSettings":
        """
        Factory method to create ConsoleSettings from the persisted application Settings.
        Keys that are missing or empty fall back to the field defaults; present
        values go through pydantic, so a stored "false" reads as False.
        """
        data: Dict[str, Any] = {}
        for field, key in _KEYS.items():
            value = settings.get(key)
            if value is not None and value != "":
                data[field] = value
        if "log_level" in data:
            data["log_level"] = str(data["log_level"]).upper()
        return cls.model_validate(data)
