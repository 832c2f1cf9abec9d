"""Configuration management for poeditor-sync."""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..core.term_store import ExportFormat
from .validators import is_valid_language_code, is_valid_swift_identifier

CONFIG_FILE_NAME = '.poeditor.yml'

# Environment variables that override values from the config file
ENV_TOKEN = 'POEDITOR_API_TOKEN'
ENV_PROJECT_ID = 'POEDITOR_PROJECT_ID'


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    exit_code = 1

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ProjectConfig:
    """POEditor project configuration."""
    id: str = ""
    token: str = ""  # Prefer the POEDITOR_API_TOKEN environment variable
    language: str = "en"


@dataclass
class UploadConfig:
    """Term upload (sync) configuration."""
    path: str = ""  # Swift file that declares the localization enum
    enum_name: str = "I18n"
    lowercased: bool = False
    delete_removals: bool = False


@dataclass
class DownloadConfig:
    """Export download configuration."""
    destination: str = ""
    export_type: str = ExportFormat.APPLE_STRINGS.value
    backup: bool = False


@dataclass
class ClientConfig:
    """HTTP client configuration."""
    timeout: float = 30.0
    base_url: str = "https://api.poeditor.com/v2/"


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    client: ClientConfig = field(default_factory=ClientConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None, use_env: bool = True) -> 'Config':
        """Load configuration from YAML file, then apply environment overrides."""
        data: Dict[str, Any] = {}

        if config_path is None:
            # Look for .poeditor.yml in current directory
            config_path = Path.cwd() / CONFIG_FILE_NAME
            if not config_path.exists():
                config_path = None

        if config_path is not None:
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except OSError as e:
                raise ConfigValidationError([f"Cannot read {config_path}: {e}"]) from e
            except yaml.YAMLError as e:
                raise ConfigValidationError([f"Invalid YAML in {config_path}: {e}"]) from e

            if not isinstance(data, dict):
                raise ConfigValidationError([f"{config_path} must contain a mapping"])

        try:
            config = cls(
                project=ProjectConfig(**(data.get('project') or {})),
                upload=UploadConfig(**(data.get('upload') or {})),
                download=DownloadConfig(**(data.get('download') or {})),
                client=ClientConfig(**(data.get('client') or {})),
            )
        except TypeError as e:
            raise ConfigValidationError([f"Unknown configuration option ({e})"]) from e

        # YAML reads numeric project ids as int
        config.project.id = str(config.project.id) if config.project.id is not None else ""

        if use_env:
            config.apply_environment()

        return config

    def apply_environment(self, environ: Optional[Dict[str, str]] = None):
        """Override token and project id from environment variables."""
        environ = os.environ if environ is None else environ

        if environ.get(ENV_TOKEN):
            self.project.token = environ[ENV_TOKEN]
        if environ.get(ENV_PROJECT_ID):
            self.project.id = environ[ENV_PROJECT_ID]

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'project': {
                'id': self.project.id,
                'token': self.project.token,
                'language': self.project.language,
            },
            'upload': {
                'path': self.upload.path,
                'enum_name': self.upload.enum_name,
                'lowercased': self.upload.lowercased,
                'delete_removals': self.upload.delete_removals,
            },
            'download': {
                'destination': self.download.destination,
                'export_type': self.download.export_type,
                'backup': self.download.backup,
            },
            'client': {
                'timeout': self.client.timeout,
                'base_url': self.client.base_url,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @property
    def export_format(self) -> ExportFormat:
        return ExportFormat.from_value(self.download.export_type)

    def validate(
        self,
        command: Optional[str] = None,
        raise_on_error: bool = False
    ) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            command: 'upload' or 'download' to also check that command's section
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        # Credentials
        if not self.project.id:
            errors.append(f"project.id is required (or set {ENV_PROJECT_ID})")
        if not self.project.token:
            errors.append(f"project.token is required (or set {ENV_TOKEN})")

        if not is_valid_language_code(self.project.language):
            errors.append(
                f"Invalid language code: '{self.project.language}'. "
                f"Use ISO 639-1 format (e.g., 'en', 'tr', 'pt-br')"
            )

        # Client
        if not isinstance(self.client.timeout, (int, float)) or self.client.timeout <= 0:
            errors.append(f"client.timeout must be a positive number, got {self.client.timeout}")
        if not str(self.client.base_url).startswith('https://'):
            warnings.append(ConfigValidationWarning(
                f"client.base_url is not an https URL: {self.client.base_url}"
            ))

        # YAML reads a quoted "false" as a truthy string
        flags = {
            'upload.lowercased': self.upload.lowercased,
            'upload.delete_removals': self.upload.delete_removals,
            'download.backup': self.download.backup,
        }
        for name, value in flags.items():
            if not isinstance(value, bool):
                errors.append(f"{name} must be true or false, got {value!r}")

        if command == 'upload':
            if not self.upload.path:
                errors.append("upload.path is required")
            elif not Path(self.upload.path).exists():
                warnings.append(ConfigValidationWarning(
                    f"Declaration file does not exist: {self.upload.path}"
                ))

            if not is_valid_swift_identifier(self.upload.enum_name):
                errors.append(f"upload.enum_name is not a valid Swift identifier: '{self.upload.enum_name}'")

        if command == 'download':
            if not self.download.destination:
                errors.append("download.destination is required")
            else:
                parent = Path(self.download.destination).parent
                if not parent.is_dir():
                    warnings.append(ConfigValidationWarning(
                        f"Destination directory does not exist: {parent}"
                    ))

            try:
                ExportFormat.from_value(self.download.export_type)
            except ValueError as e:
                errors.append(str(e))

        # Raise error if requested
        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config() -> Config:
    """Create default configuration with typical Xcode project paths."""
    config = Config()
    config.upload.path = './Sources/I18n.swift'
    config.download.destination = './Resources/en.lproj/Localizable.strings'
    return config
