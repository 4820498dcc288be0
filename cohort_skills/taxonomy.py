"""Department -> role -> required-skill taxonomy supplied by the inference service.

The taxonomy arrives as model output, so every entry is validated on its own
and malformed entries are dropped rather than failing the whole payload.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .log import get_logger

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class RoleRequirement(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str = Field(min_length=1)
    required_skills: list[str] = Field(default_factory=list, alias="requiredSkills")

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("required_skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "requiredSkills": list(self.required_skills)}


class DepartmentMapping(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    department: str = Field(min_length=1)
    possible_roles: list[RoleRequirement] = Field(default_factory=list, alias="possibleRoles")

    def to_payload(self) -> dict[str, Any]:
        return {
            "department": self.department,
            "possibleRoles": [role.to_payload() for role in self.possible_roles],
        }


def clean_json_text(text: str | None) -> str:
    if not text:
        return "{}"
    cleaned = text
    if "```" in cleaned:
        cleaned = _FENCE_RE.sub("", cleaned)
    return cleaned.strip()


def _parse_roles(raw_roles: Any, department: str) -> list[RoleRequirement]:
    if not isinstance(raw_roles, list):
        return []
    roles: list[RoleRequirement] = []
    for raw in raw_roles:
        try:
            roles.append(RoleRequirement.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Dropping malformed role under %r: %s", department, exc.errors()[0]["msg"])
    return roles


def load_taxonomy(payload: Any) -> list[DepartmentMapping]:
    """Accept a mapping list, an analysis object, or JSON text of either."""
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="ignore")
    if isinstance(payload, str):
        try:
            payload = json.loads(clean_json_text(payload))
        except json.JSONDecodeError:
            logger.warning("Taxonomy text is not valid JSON; continuing without taxonomy")
            return []
    if isinstance(payload, dict):
        payload = payload.get("departmentMappings", payload.get("department_mappings"))
    if not isinstance(payload, list):
        return []

    mappings: list[DepartmentMapping] = []
    for raw in payload:
        if isinstance(raw, DepartmentMapping):
            mappings.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.warning("Dropping taxonomy entry of type %s", type(raw).__name__)
            continue
        name = raw.get("department")
        department = str(name).strip() if name is not None else ""
        roles = _parse_roles(raw.get("possibleRoles", raw.get("possible_roles")), department)
        try:
            mappings.append(DepartmentMapping(department=department, possible_roles=roles))
        except ValidationError:
            logger.warning("Dropping taxonomy entry without a department name")
    return mappings


def resolve_department(
    taxonomy: list[DepartmentMapping],
    department: str | None,
) -> DepartmentMapping | None:
    wanted = (department or "").lower()
    for mapping in taxonomy:
        name = mapping.department.lower()
        if wanted in name or name in wanted:
            return mapping
    return taxonomy[0] if taxonomy else None


def default_role(taxonomy: list[DepartmentMapping], department: str | None) -> RoleRequirement | None:
    mapping = resolve_department(taxonomy, department)
    if mapping is None or not mapping.possible_roles:
        return None
    return mapping.possible_roles[0]


def available_roles(taxonomy: list[DepartmentMapping], department: str | None) -> list[RoleRequirement]:
    wanted = (department or "").lower()
    for mapping in taxonomy:
        if mapping.department.lower() == wanted:
            return list(mapping.possible_roles)
    return [role for mapping in taxonomy for role in mapping.possible_roles]


def find_role(taxonomy: list[DepartmentMapping], title: str) -> RoleRequirement | None:
    for mapping in taxonomy:
        for role in mapping.possible_roles:
            if role.title == title:
                return role
    return None


def role_titles(taxonomy: list[DepartmentMapping]) -> list[str]:
    titles: dict[str, None] = {}
    for mapping in taxonomy:
        for role in mapping.possible_roles:
            titles.setdefault(role.title, None)
    return list(titles)
