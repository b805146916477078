"""
Component Link Resource — compass_component_link lifecycle mapped onto GraphQL.

  create   createComponentLink(input), then find the new link on the
           component by its attributes, then read
  read     component(id).links, picked by link id
  update   updateComponentLink(input) with only the changed fields, then read
  delete   deleteComponentLink(input: {componentId, link})
  import   "component_id:link_id" or "component_id/link_id", then read

createComponentLink answers with a success flag only, so the id of the new
link is recovered from the component's link list by matching name, type, url
and object id (an unset object id only matches links without one). If that
does not single out one link the create fails with AmbiguousCreateError; the
link may then exist remotely without being tracked, and nothing is retried.

Links belong to exactly one component. When the component is deleted its
links disappear with it; read treats that the same as a deleted link.
"""

from typing import Any, Dict, List, Optional, Tuple

from .errors import AmbiguousCreateError, NotFoundError, ValidationError
from .graphql_queries import COMPONENT_LINK_QUERIES
from .resource_base import BaseResource
from .resource_data import ResourceData

LINK_TYPES = (
    "DOCUMENT",
    "CHAT_CHANNEL",
    "REPOSITORY",
    "PROJECT",
    "DASHBOARD",
    "ON_CALL",
    "OTHER_LINK",
)

_TRACKED_FIELDS: Dict[str, str] = {
    "name": "name",
    "type": "type",
    "url": "url",
    "object_id": "objectId",
}

_IMMUTABLE_FIELDS = ("component_id", "cloud_id")

_IMPORT_SEPARATORS = (":", "/")


def parse_import_id(import_id: str) -> Tuple[str, str]:
    """Split an import id into (component_id, link_id) at the last ':' or '/'.

    Component ids may themselves contain both characters; link ids may not.

    Raises:
        ValidationError: If there is no separator or either side is empty.
    """
    import_id = (import_id or "").strip()
    index = max(import_id.rfind(sep) for sep in _IMPORT_SEPARATORS)
    if index > 0 and index < len(import_id) - 1:
        return import_id[:index], import_id[index + 1:]
    raise ValidationError(
        "invalid import format. Expected component_id:link_id or "
        f"component_id/link_id, got: {import_id}"
    )


def link_matches(link: Dict[str, Any], name: str, link_type: str, url: str,
                 object_id: str) -> bool:
    """Whether a remote link carries exactly these attributes."""
    if link.get("name") != name or link.get("type") != link_type or link.get("url") != url:
        return False
    return (link.get("objectId") or "") == (object_id or "")


class ComponentLinkResource(BaseResource):
    """Maps compass_component_link onto Compass component-link mutations."""

    type_name = "compass_component_link"
    label = "component link"
    valid_types = LINK_TYPES
    queries = COMPONENT_LINK_QUERIES

    def _fetch_links(self, component_id: str, action: str,
                     timeout: Optional[float] = None) -> Optional[List[Dict[str, Any]]]:
        """Return the component's links, or None if the component is gone."""
        result = self._call(
            action, self.queries["read"], {"componentId": component_id}, timeout=timeout
        )
        component = (result.get("compass") or {}).get("component") or {}
        if "id" not in component and "links" not in component:
            return None
        return [link for link in component.get("links") or [] if isinstance(link, dict)]

    def create(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Create the link, identify it on its component, then read.

        Raises:
            ValidationError: Bad type, missing attribute, or no way to get a cloud id.
            GraphQLError: If the API rejects the mutation.
            AmbiguousCreateError: If the new link cannot be singled out.
        """
        link_type = self.validate_type(data.get("type"))
        self._require(data, "component_id", "name", "url")
        self.provider.cloud_id_for(data, timeout=timeout)

        component_id = data.get("component_id")
        name = data.get("name")
        url = data.get("url")
        object_id = data.get("object_id")

        link_input = {"name": name, "type": link_type, "url": url}
        if object_id:
            link_input["objectId"] = object_id

        if self.debug:
            print(f"  Creating {link_type} link '{name}' on component {component_id}")

        result = self._call(
            "create component link",
            self.queries["create"],
            {"input": {"componentId": component_id, "link": link_input}},
            timeout=timeout,
        )
        self._require_success(
            self._mutation_payload(result, "createComponentLink"), "create component link"
        )

        links = self._fetch_links(
            component_id, "read component links after creation", timeout=timeout
        ) or []
        matches = [link for link in links if link_matches(link, name, link_type, url, object_id)]

        context = {"component_id": component_id, "name": name}
        if not matches:
            raise AmbiguousCreateError(
                "failed to find created link in component. Created link may not be visible yet "
                "and is not tracked",
                context=context,
            )
        if len(matches) > 1:
            candidates = [link.get("id", "") for link in matches]
            raise AmbiguousCreateError(
                f"created link matches {len(matches)} links on the component; "
                f"import the intended one as {component_id}:<link_id>",
                candidates=candidates,
                context=context,
            )

        data.set_id(matches[0].get("id") or "")

        if self.debug:
            print(f"  Component link created: {data.id}")

        return self.read(data, timeout=timeout)

    def read(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Refresh the link from its component's link list.

        A missing link, or a missing component, clears the id. A cloud_id
        absent from state is derived from the provider tenant when one is set.
        """
        link_id = self._require_id(data)
        self._require(data, "component_id")
        component_id = data.get("component_id")

        links = self._fetch_links(component_id, "read component link", timeout=timeout)
        found = next((link for link in links or [] if link.get("id") == link_id), None)

        if found is None:
            if self.debug:
                print(f"  Component link {link_id} not found on {component_id}, clearing state")
            data.set_id("")
            return data

        self._fill_cloud_id(data, timeout=timeout)

        data.set("component_id", component_id)
        data.set("name", found.get("name") or "")
        data.set("type", found.get("type") or "")
        data.set("url", found.get("url") or "")
        data.set("object_id", found.get("objectId") or "")
        return data

    def update(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        """Send the changed name/type/url/object_id, then read.

        A cloud_id missing from the prior state (a link imported without a
        provider tenant) is taken from the plan.

        Raises:
            ValidationError: If component_id or a known cloud_id changed, the
                new type is invalid, or a required attribute was emptied.
        """
        link_id = self._require_id(data)

        self._check_immutable(data, _IMMUTABLE_FIELDS)

        changed = data.changed_keys(_TRACKED_FIELDS)
        if not changed:
            return self.read(data, timeout=timeout)

        if "type" in changed:
            self.validate_type(data.get("type"))
        self._require(data, *[f for f in ("name", "url") if f in changed])

        link_input = {"id": link_id}
        for attr in changed:
            link_input[_TRACKED_FIELDS[attr]] = data.get(attr) or None

        if self.debug:
            print(f"  Updating component link {link_id}: {', '.join(changed)}")

        result = self._call(
            "update component link",
            self.queries["update"],
            {"input": {"componentId": data.get("component_id"), "link": link_input}},
            timeout=timeout,
        )
        self._require_success(
            self._mutation_payload(result, "updateComponentLink"), "update component link"
        )

        return self.read(data, timeout=timeout)

    def delete(self, data: ResourceData, timeout: Optional[float] = None) -> ResourceData:
        link_id = self._require_id(data)
        self._require(data, "component_id")

        result = self._call(
            "delete component link",
            self.queries["delete"],
            {"input": {"componentId": data.get("component_id"), "link": link_id}},
            timeout=timeout,
        )
        self._require_success(
            self._mutation_payload(result, "deleteComponentLink"), "delete component link"
        )

        if self.debug:
            print(f"  Component link deleted: {link_id}")

        data.set_id("")
        return data

    def import_state(self, import_id: str, timeout: Optional[float] = None) -> ResourceData:
        """Adopt an existing link from "component_id:link_id" (or "/").

        Raises:
            ValidationError: If the id is malformed.
            NotFoundError: If the link does not exist on that component.
        """
        component_id, link_id = parse_import_id(import_id)

        data = ResourceData(id=link_id, attributes={"component_id": component_id})
        data = self.read(data, timeout=timeout)
        if not data.exists:
            raise NotFoundError(
                "cannot import non-existent remote component link",
                {"component_id": component_id, "id": link_id},
            )
        return data
