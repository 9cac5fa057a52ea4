"""
Maven build descriptor (pom.xml) I/O

Descriptors are parsed with ElementTree keeping comments, mutated in place
through their version elements, and serialised back with the POM namespace as
the default namespace.
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from releaseos.core.errors import FormatError, GraphError, IOFailure
from releaseos.core.graph.artifact import ArtifactId
from releaseos.core.graph.model import ReferenceCategory, ReferenceSite, ScopeStrategy
from releaseos.core.utils.atomic_write import atomic_write, backup_file
from releaseos.core.version import SemanticVersion

logger = logging.getLogger(__name__)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

ET.register_namespace("", POM_NAMESPACE)
ET.register_namespace("xsi", XSI_NAMESPACE)

PLACEHOLDER_PATTERN = re.compile(r"^\$\{[^{}]+\}$")

# XML declaration, comments, processing instructions and DOCTYPE before the root
PROLOG_PATTERN = re.compile(
    rb"(?:\xef\xbb\xbf)?(?:\s+|<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^\[>]*(?:\[.*?\])?\s*>)*",
    re.DOTALL,
)

# Element paths below <project> that hold artifact references
SITE_PATHS = (
    (ReferenceCategory.PARENT, ("parent",)),
    (ReferenceCategory.DEPENDENCY, ("dependencies", "dependency")),
    (ReferenceCategory.DEPENDENCY_MANAGEMENT, ("dependencyManagement", "dependencies", "dependency")),
    (ReferenceCategory.PLUGIN, ("build", "plugins", "plugin")),
    (ReferenceCategory.PLUGIN_MANAGEMENT, ("build", "pluginManagement", "plugins", "plugin")),
)


@dataclass(eq=False)
class ProjectDescriptor:
    """A parsed pom.xml.

    Attributes:
        path: File the descriptor was read from
        root: The <project> element
        namespace: XML namespace of the document ('' when unqualified)
        prolog: Text before the root element, written back unchanged
        dirty: True once an element text was changed in memory
    """

    path: Path
    root: ET.Element
    namespace: str = ""
    prolog: str = XML_DECLARATION + "\n"
    dirty: bool = False

    def qualify(self, name: str) -> str:
        return f"{{{self.namespace}}}{name}" if self.namespace else name

    def find(self, *names: str, parent: Optional[ET.Element] = None) -> Optional[ET.Element]:
        element = self.root if parent is None else parent
        return element.find("/".join(self.qualify(n) for n in names))

    def findall(self, *names: str, parent: Optional[ET.Element] = None) -> List[ET.Element]:
        element = self.root if parent is None else parent
        return element.findall("/".join(self.qualify(n) for n in names))

    def text(self, *names: str, parent: Optional[ET.Element] = None) -> Optional[str]:
        element = self.find(*names, parent=parent)
        if element is None or element.text is None:
            return None
        return element.text.strip() or None

    def set_text(self, element: ET.Element, value: str) -> bool:
        """Replace an element text, marking the descriptor dirty on change."""
        if (element.text or "").strip() == value:
            return False
        element.text = value
        self.dirty = True
        return True

    @property
    def artifact_name(self) -> Optional[str]:
        return self.text("artifactId")

    @property
    def group(self) -> Optional[str]:
        """Own groupId, falling back to the parent's."""
        return self.text("groupId") or self.text("parent", "groupId")

    @property
    def modules(self) -> List[str]:
        return [
            element.text.strip()
            for element in self.findall("modules", "module")
            if element.text and element.text.strip()
        ]

    def artifact_id(self) -> ArtifactId:
        if not self.group or not self.artifact_name:
            raise GraphError(
                "Project must declare artifactId and a groupId (own or inherited from parent)",
                path=self.path,
            )
        return ArtifactId(self.group, self.artifact_name)


def read_descriptor(path: Union[str, Path]) -> ProjectDescriptor:
    """Parse a pom.xml keeping comments and everything before the root element.

    Raises:
        IOFailure: If the file cannot be read
        FormatError: If the file is not well-formed XML
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise IOFailure(f"Unable to read project descriptor: {e}", path=path) from e
    logger.info(f"Read {len(data.splitlines())} lines from {path}")

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        parser.feed(data)
        root = parser.close()
    except ET.ParseError as e:
        raise FormatError(f"Invalid project descriptor: {e}", path=path) from e

    namespace = ""
    if root.tag.startswith("{"):
        namespace = root.tag[1:].split("}", 1)[0]
    prolog = PROLOG_PATTERN.match(data).group(0).decode("utf-8", errors="replace")
    return ProjectDescriptor(path=path, root=root, namespace=namespace, prolog=prolog)


def locate_version_node(descriptor: ProjectDescriptor, scope: ScopeStrategy) -> ET.Element:
    """Return the element holding the module version for the scope strategy.

    Raises:
        GraphError: If the descriptor has no such element
    """
    path = scope.version_path
    element = descriptor.find(*path)
    if element is None:
        raise GraphError(
            "Unable to find project version on the path: " + "->".join(("project",) + path),
            path=descriptor.path,
        )
    return element


def extract_reference_sites(descriptor: ProjectDescriptor, owner: ArtifactId) -> List[ReferenceSite]:
    """Collect the version references a descriptor holds.

    A reference needs groupId, artifactId and version. Versions that are
    neither a semantic version nor a ${property} placeholder are skipped.
    """
    sites = []
    for category, path in SITE_PATHS:
        for element in descriptor.findall(*path):
            group = descriptor.text("groupId", parent=element)
            name = descriptor.text("artifactId", parent=element)
            version = descriptor.find("version", parent=element)
            if not group or not name or version is None or not version.text:
                continue

            text = version.text.strip()
            if SemanticVersion.is_valid(text):
                literal = True
            elif PLACEHOLDER_PATTERN.match(text):
                literal = False
            else:
                logger.debug(f"Skipping {category.value} {group}:{name} with version '{text}' in {descriptor.path}")
                continue

            sites.append(
                ReferenceSite(
                    owner=owner,
                    target=ArtifactId(group, name),
                    category=category,
                    element=version,
                    literal=literal,
                )
            )
    return sites


def render_descriptor(descriptor: ProjectDescriptor) -> str:
    body = ET.tostring(descriptor.root, encoding="unicode")
    return f"{descriptor.prolog}{body}\n"


def write_descriptor(
    descriptor: ProjectDescriptor,
    path: Union[str, Path, None] = None,
    backup: bool = False,
) -> Path:
    """Write a descriptor to disk, optionally backing up the previous file.

    Raises:
        IOFailure: If the backup or the write fails
    """
    path = Path(path) if path is not None else descriptor.path
    if backup and path.exists():
        backup_file(path)
    atomic_write(path, render_descriptor(descriptor))
    descriptor.dirty = False
    logger.info(f"Wrote project descriptor {path}")
    return path
