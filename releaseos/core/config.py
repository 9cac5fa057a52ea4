"""
Versioning Configuration

Settings are read from an optional YAML file (.releaseos.yaml in the project
directory, or the file passed with --config). Command line options override
values from the file.

Configuration file format (YAML):
    scope: project-version
    identifier: group-and-artifact
    directory: .versioning
    git: no-git
    backup: false
    scripts: ["scripts/on-bump.sh"]
    commit_message: "Updated {numberOfProjects} project version(s) [skip ci]"
    headers:
      changelog: Changelog
      version: "{version} - {date#yyyy-MM-dd}"
      major: Major
      minor: Minor
      patch: Patch
      other: Other
    verification:
      mode: none
      consistent: false
    graph:
      output: artifact-and-folder
      relative_paths: true
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from releaseos.core.engine.headers import validate_header_template
from releaseos.core.engine.verification import VerificationMode
from releaseos.core.errors import ConfigurationError
from releaseos.core.graph.artifact import ArtifactIdentifier
from releaseos.core.graph.model import ScopeStrategy
from releaseos.core.intent.store import VERSIONING_DIR
from releaseos.core.version import BumpKind

logger = logging.getLogger(__name__)

CONFIG_FILE = ".releaseos.yaml"
DEFAULT_COMMIT_MESSAGE = "Updated {numberOfProjects} project version(s) [skip ci]"
COMMIT_PLACEHOLDERS = {"numberOfProjects"}


class BumpStrategy(str, Enum):
    FILE_BASED = "file-based"
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @property
    def forced(self) -> Optional[BumpKind]:
        """The bump forced onto every module, None for file based runs."""
        if self is BumpStrategy.FILE_BASED:
            return None
        return BumpKind[self.name]


class GitMode(str, Enum):
    NO_GIT = "no-git"
    STASH = "stash"
    COMMIT = "commit"

    @property
    def is_stash(self) -> bool:
        return self is not GitMode.NO_GIT

    @property
    def is_commit(self) -> bool:
        return self is GitMode.COMMIT


class GraphOutput(str, Enum):
    ARTIFACT_ONLY = "artifact-only"
    FOLDER_ONLY = "folder-only"
    ARTIFACT_AND_FOLDER = "artifact-and-folder"


def coerce_enum(enum_cls: Type[Enum], value: Any) -> Any:
    """Accept enum members, values ('file-based') or names ('FILE_BASED')."""
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    text = value.strip()
    for member in enum_cls:
        if text.lower() == member.value or text.upper() == member.name:
            return member
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValueError(f"'{value}' is not one of: {allowed}")


class ChangelogHeaders(BaseModel):
    """Headings used when merging changelog sections"""

    changelog: str = Field(default="Changelog", description="Text of the H1 title")
    version: str = Field(
        default="{version} - {date#yyyy-MM-dd}",
        description="Template of the H2 heading per release",
    )
    major: str = Field(default="Major", description="H3 heading for major changes")
    minor: str = Field(default="Minor", description="H3 heading for minor changes")
    patch: str = Field(default="Patch", description="H3 heading for patch changes")
    other: str = Field(default="Other", description="H3 heading for changes without a bump")

    @field_validator("changelog", "major", "minor", "patch", "other")
    @classmethod
    def validate_label(cls, v):
        if not v or not v.strip():
            raise ValueError("Header labels cannot be blank")
        return v.strip()

    @field_validator("version")
    @classmethod
    def validate_version(cls, v):
        try:
            return validate_header_template(v)
        except ConfigurationError as e:
            raise ValueError(e.message) from e


class VerificationSettings(BaseModel):
    mode: VerificationMode = Field(default=VerificationMode.NONE)
    consistent: bool = Field(default=False, description="Require identical bumps for all artifacts")

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v):
        return coerce_enum(VerificationMode, v)


class GraphSettings(BaseModel):
    output: GraphOutput = Field(default=GraphOutput.ARTIFACT_AND_FOLDER)
    relative_paths: bool = Field(default=True, description="Print folders relative to the project directory")

    @field_validator("output", mode="before")
    @classmethod
    def validate_output(cls, v):
        return coerce_enum(GraphOutput, v)


class VersioningConfig(BaseModel):
    """
    Settings for one releaseos invocation

    Attributes:
        scope: Which modules are versioned and where their version lives
        identifier: How artifacts are written in version Markdown files
        directory: Folder holding version Markdown files, relative to the project
        bump: File based resolution or a forced bump for all modules
        git: Whether changed files are staged or committed
        dry_run: Compute and log everything without writing
        backup: Copy files to <name>.backup before overwriting them
        scripts: Scripts run once per changed module
        commit_message: Commit message template
    """

    scope: ScopeStrategy = Field(default=ScopeStrategy.PROJECT_VERSION)
    identifier: ArtifactIdentifier = Field(default=ArtifactIdentifier.GROUP_ID_AND_ARTIFACT_ID)
    directory: str = Field(default=VERSIONING_DIR)
    bump: BumpStrategy = Field(default=BumpStrategy.FILE_BASED)
    git: GitMode = Field(default=GitMode.NO_GIT)
    dry_run: bool = False
    backup: bool = False
    scripts: List[Path] = Field(default_factory=list)
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE)
    headers: ChangelogHeaders = Field(default_factory=ChangelogHeaders)
    verification: VerificationSettings = Field(default_factory=VerificationSettings)
    graph: GraphSettings = Field(default_factory=GraphSettings)

    @field_validator("scope", mode="before")
    @classmethod
    def validate_scope(cls, v):
        return coerce_enum(ScopeStrategy, v)

    @field_validator("identifier", mode="before")
    @classmethod
    def validate_identifier(cls, v):
        return coerce_enum(ArtifactIdentifier, v)

    @field_validator("bump", mode="before")
    @classmethod
    def validate_bump(cls, v):
        return coerce_enum(BumpStrategy, v)

    @field_validator("git", mode="before")
    @classmethod
    def validate_git(cls, v):
        return coerce_enum(GitMode, v)

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v):
        if not v or not v.strip():
            raise ValueError("Versioning directory cannot be empty")
        return v.strip()

    @field_validator("commit_message")
    @classmethod
    def validate_commit_message(cls, v):
        unknown = set(re.findall(r"\{([^{}]*)\}", v)) - COMMIT_PLACEHOLDERS
        if unknown:
            raise ValueError(f"Unknown placeholder(s) in commit message: {', '.join(sorted(unknown))}")
        return v

    def versioning_dir(self, project_dir: Union[str, Path]) -> Path:
        return Path(project_dir) / self.directory

    def format_commit_message(self, number_of_projects: int) -> str:
        return self.commit_message.replace("{numberOfProjects}", str(number_of_projects))


def _merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep merge overrides into base, skipping None values."""
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(merged[key], value)
        elif isinstance(value, Mapping):
            merged[key] = _merge({}, value)
        else:
            merged[key] = value
    return merged


def load_config(
    project_dir: Union[str, Path],
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> VersioningConfig:
    """
    Load configuration from YAML and apply overrides

    Args:
        project_dir: Project directory holding the root pom.xml
        config_path: Explicit configuration file (must exist when given)
        overrides: Values taking precedence over the file (None values ignored)

    Raises:
        ConfigurationError: If the file is unreadable or a value is invalid
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path(project_dir) / CONFIG_FILE

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}", path=path) from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigurationError("Configuration must be a mapping", path=path)
        data = loaded or {}
        logger.debug(f"Loaded configuration from {path}")
    elif explicit:
        raise ConfigurationError("Configuration file not found", path=path)
    else:
        logger.debug(f"No configuration file at {path}, using defaults")

    data = _merge(data, overrides or {})
    try:
        return VersioningConfig.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}", path=path if path.exists() else None) from e
