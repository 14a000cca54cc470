"""
Typed views over the JSON settings blobs stored on integration providers and
stores.

Business logic never reads ``IntegrationProvider.settings`` or
``IntegrationStore.settings`` directly. It goes through ``ProviderSettings``
and ``StoreSettings``, which know the fields the engine uses and carry every
other key through ``extra`` untouched, so a round-trip never loses data
written by another client.

Keys are stored in snake_case. Legacy camelCase keys are accepted on read.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

SETTINGS_VERSION = 1


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _SettingsBlob:
    """Shared (de)serialization for the settings dataclasses."""

    @classmethod
    def _known_fields(cls):
        return [f for f in fields(cls) if f.name not in ("extra", "version")]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        data = dict(data or {})
        kwargs = {"version": data.pop("version", SETTINGS_VERSION)}
        for f in cls._known_fields():
            camel = _camel(f.name)
            if f.name in data:
                kwargs[f.name] = data.pop(f.name)
                data.pop(camel, None)
            elif camel in data:
                kwargs[f.name] = data.pop(camel)
        kwargs["extra"] = data
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = dict(self.extra)
        result["version"] = self.version
        for f in self._known_fields():
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result


@dataclass
class ProviderSettings(_SettingsBlob):
    version: int = SETTINGS_VERSION
    environment: Optional[str] = None
    developer_id: Optional[str] = None
    key_id: Optional[str] = None
    signing_secret: Optional[str] = None
    provider_type: Optional[str] = None
    menu_reference: Optional[str] = None
    menu_name: Optional[str] = None
    user_agent: Optional[str] = None
    open_hours: Optional[List[Dict[str, Any]]] = None
    special_hours: Optional[List[Dict[str, Any]]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_credentials(self) -> bool:
        return bool(self.developer_id and self.key_id and self.signing_secret)


@dataclass
class StoreSettings(_SettingsBlob):
    version: int = SETTINGS_VERSION
    menu_id: Optional[str] = None
    last_menu_status: Optional[str] = None
    last_menu_event: Optional[str] = None
    last_menu_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
