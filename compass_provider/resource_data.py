"""
Resource Data — The local state record each lifecycle callback works on.

A ResourceData holds the identity of one resource instance plus two
attribute maps:

  attributes   What the resource should look like now: the configuration on
               create, the planned values on update, the refreshed values
               after a read.
  prior        The last persisted state. Only meaningful on update, where it
               drives has_change().

Optional string attributes follow the plan convention that "unset" and ""
are the same value, so get() returns "" and has_change() treats None and ""
as equal.

An empty id means "this resource does not exist (any more)". Read clears it
when the remote entity has vanished; delete clears it on success.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional


def _normalize(value: Any) -> Any:
    return "" if value is None else value


@dataclass
class ResourceData:
    id: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)
    prior: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ResourceData":
        """Build the record for a create call."""
        return cls(attributes=dict(config))

    @classmethod
    def from_state(cls, resource_id: str, state: Optional[Mapping[str, Any]] = None) -> "ResourceData":
        """Build the record for a read or delete of an existing resource."""
        state = dict(state or {})
        return cls(id=resource_id, attributes=dict(state), prior=dict(state))

    @classmethod
    def for_update(cls, resource_id: str, prior: Mapping[str, Any],
                   planned: Mapping[str, Any]) -> "ResourceData":
        """Build the record for an update.

        Planned values overlay the prior state, so attributes missing from
        `planned` (computed ones such as cloud_id) keep their prior value.
        """
        attributes = dict(prior)
        attributes.update(planned)
        return cls(id=resource_id, attributes=attributes, prior=dict(prior))

    @property
    def exists(self) -> bool:
        return bool(self.id)

    def get(self, key: str, default: Any = "") -> Any:
        value = self.attributes.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def set_id(self, resource_id: str) -> None:
        self.id = resource_id or ""

    def has_change(self, key: str) -> bool:
        return _normalize(self.attributes.get(key)) != _normalize(self.prior.get(key))

    def has_changes(self, *keys: str) -> bool:
        return any(self.has_change(k) for k in keys)

    def changed_keys(self, keys: Iterable[str]) -> List[str]:
        return [k for k in keys if self.has_change(k)]

    def to_state(self) -> Dict[str, Any]:
        """Snapshot suitable for persisting: {"id": ..., **attributes}."""
        state = {"id": self.id}
        state.update(self.attributes)
        return state
