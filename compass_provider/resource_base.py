"""
Base resource mapper with the plumbing shared by every Compass resource.

Subclasses declare their type name, their fixed type enumeration and the
GraphQL documents they own, and implement create/read/update/delete/
import_state. The base class provides:

  - validate_type(): fail fast on values outside the enumeration
  - _call(): one round trip through the shared client, with errors prefixed
    by the operation ("failed to create component: ..."); an optional
    timeout narrows the client deadline for that call
  - _check_immutable(): reject changes to fields fixed after creation,
    unless the prior state never knew the value (e.g. after import)
  - _fill_cloud_id(): derive a missing cloud_id from the provider tenant
  - _mutation_payload() / _require_success(): unwrap compass.<mutation>
    and turn success=false into a GraphQLError
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import CompassProviderError, GraphQLError, ValidationError
from .resource_data import ResourceData


class BaseResource:
    """Common behaviour for Compass resource mappers.

    Attributes:
        provider: The ConfiguredProvider (shared client + tenant).
        client: Shortcut to provider.client.
        debug: Enable verbose output.
    """

    type_name = ""
    label = "resource"
    valid_types: Tuple[str, ...] = ()
    queries: Mapping[str, str] = {}

    def __init__(self, provider, debug: Optional[bool] = None):
        self.provider = provider
        self.client = provider.client
        self.debug = provider.debug if debug is None else debug

    def validate_type(self, value: str) -> str:
        if value not in self.valid_types:
            raise ValidationError(
                f"invalid {self.label} type: {value}. Valid values are: {', '.join(self.valid_types)}"
            )
        return value

    def _require(self, data: ResourceData, *keys: str) -> None:
        missing = [k for k in keys if not data.get(k)]
        if missing:
            raise ValidationError(f"{self.label}: {', '.join(missing)} is required")

    def _require_id(self, data: ResourceData) -> str:
        if not data.id:
            raise ValidationError(f"{self.label}: id is required")
        return data.id

    def _call(self, action: str, query: str, variables: Dict[str, Any],
              timeout: Optional[float] = None) -> Dict[str, Any]:
        try:
            return self.client.execute(query, variables, timeout=timeout)
        except CompassProviderError as e:
            raise e.with_prefix(f"failed to {action}") from e

    def _check_immutable(self, data: ResourceData, fields: Sequence[str]) -> List[str]:
        """Reject changes to fields that are fixed after creation.

        A field whose prior value is empty was never known locally (an
        imported resource has no type, and no cloud_id without a tenant), so
        the planned value is adopted instead.

        Returns:
            The fields whose planned value was adopted.

        Raises:
            ValidationError: If a known value changed.
        """
        changed = data.changed_keys(fields)
        rejected = [k for k in changed if data.prior.get(k)]
        if rejected:
            raise ValidationError(
                f"changing {', '.join(rejected)} of an existing {self.label} is not supported. "
                f"Please delete and recreate the {self.label}.",
                {"id": data.id},
            )
        return changed

    def _fill_cloud_id(self, data: ResourceData, timeout: Optional[float] = None) -> None:
        if not data.get("cloud_id") and self.provider.tenant:
            self.provider.cloud_id_for(data, timeout=timeout)

    @staticmethod
    def _mutation_payload(data: Dict[str, Any], mutation: str) -> Dict[str, Any]:
        return ((data.get("compass") or {}).get(mutation)) or {}

    @staticmethod
    def _require_success(payload: Dict[str, Any], action: str) -> None:
        if payload.get("success"):
            return
        messages = [
            e.get("message", "")
            for e in payload.get("errors") or []
            if isinstance(e, dict) and e.get("message")
        ]
        if not messages:
            messages = ["mutation returned success=false"]
        raise GraphQLError(messages).with_prefix(f"failed to {action}")

    def create(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        raise NotImplementedError

    def read(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        raise NotImplementedError

    def update(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        raise NotImplementedError

    def delete(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        raise NotImplementedError

    def import_state(self, import_id: str, timeout: Optional[float] = None) -> ResourceData:
        raise NotImplementedError
