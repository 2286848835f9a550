"""Schemas of the documents served by the Spring Boot and Starter metadata servers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from spring_version_errors import DecodeError, ResolutionError


class _Document(BaseModel):
    # Metadata servers add fields over time, only the ones we read are declared
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # null reads as an absent field, so the field default applies
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class BootRelease(_Document):
    version: str = ""
    current: bool = False
    status: str | None = None
    api_doc_url: str | None = Field(default=None, alias="apiDocUrl")
    reference_doc_url: str | None = Field(default=None, alias="referenceDocUrl")


class BootReleases(_Document):
    releases: list[BootRelease] = Field(default_factory=list)


class BootMetadata(_Document):
    """`{"_embedded": {"releases": [...]}}` from the Spring Boot releases API."""

    embedded: BootReleases = Field(default_factory=BootReleases, alias="_embedded")

    @property
    def versions(self) -> list[str]:
        return [release.version for release in self.embedded.releases]

    def resolve_version(self, target: str) -> str:
        """Return `target`, or the current release when `target` is empty.

        If several releases are flagged current the last one wins.
        """
        if not target:
            for release in self.embedded.releases:
                if release.current:
                    target = release.version
        if not target:
            raise ResolutionError("can not determine target version")
        versions = self.versions
        if target not in versions:
            raise ResolutionError(
                f"spring-boot version '{target}' is not listed in current supported versions: "
                + ", ".join(versions)
            )
        return target


class StarterType(_Document):
    id: str = ""
    action: str = ""
    name: str | None = None
    description: str | None = None
    tags: dict[str, Any] = Field(default_factory=dict)


class StarterTypes(_Document):
    default: str | None = None
    values: list[StarterType] = Field(default_factory=list)


class StarterMetadata(_Document):
    """`{"type": {"values": [...]}}` from a Spring Initializr server."""

    types: StarterTypes = Field(default_factory=StarterTypes, alias="type")

    def resolve_action(self, type_id: str) -> str:
        for starter_type in self.types.values:
            if starter_type.id == type_id:
                return starter_type.action
        raise ResolutionError("can not determine type action")


class Artifact(BaseModel):
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None
    scope: str | None = None


class MavenProject(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_version: str | None = None
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None
    packaging: str | None = None
    name: str | None = None
    description: str | None = None
    parent: Artifact | None = None
    # Insertion order follows the <properties> block of the pom
    properties: dict[str, str] = Field(default_factory=dict)
    dependencies: list[Artifact] = Field(default_factory=list)
    dependency_management: list[Artifact] = Field(default_factory=list)
    plugins: list[Artifact] = Field(default_factory=list)


def _namespace(root):
    # Generated poms use the Maven 4.0.0 namespace, hand written ones may not
    if root.tag.startswith("{"):
        return root.tag[1:].split("}", 1)[0]
    return ""


def _local_name(tag):
    return tag.rsplit("}", 1)[-1]


def parse_maven_project(content) -> MavenProject:
    """Parse a pom.xml document (bytes or str) into a MavenProject."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise DecodeError(f"could not parse maven project: {exc}") from exc
    if _local_name(root.tag) != "project":
        raise DecodeError(f"could not parse maven project: unexpected root element <{_local_name(root.tag)}>")

    uri = _namespace(root)
    ns = {"m": uri} if uri else {}
    prefix = "m:" if uri else ""

    def path(*names):
        return "/".join(prefix + name for name in names)

    def text(element, name):
        child = element.find(path(name), ns)
        if child is None or child.text is None:
            return None
        return child.text.strip()

    def artifact(element):
        return Artifact(
            group_id=text(element, "groupId"),
            artifact_id=text(element, "artifactId"),
            version=text(element, "version"),
            scope=text(element, "scope"),
        )

    properties = {}
    for prop in root.findall(path("properties") + "/*", ns):
        properties[_local_name(prop.tag)] = prop.text or ""

    parent = root.find(path("parent"), ns)
    return MavenProject(
        model_version=text(root, "modelVersion"),
        group_id=text(root, "groupId"),
        artifact_id=text(root, "artifactId"),
        version=text(root, "version"),
        packaging=text(root, "packaging"),
        name=text(root, "name"),
        description=text(root, "description"),
        parent=artifact(parent) if parent is not None else None,
        properties=properties,
        dependencies=[artifact(dep) for dep in root.findall(path("dependencies", "dependency"), ns)],
        dependency_management=[
            artifact(dep)
            for dep in root.findall(path("dependencyManagement", "dependencies", "dependency"), ns)
        ],
        plugins=[artifact(plugin) for plugin in root.findall(path("build", "plugins", "plugin"), ns)],
    )
