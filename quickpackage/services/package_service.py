"""Debian package generation service"""

import logging
import shlex
import shutil
import subprocess
from datetime import datetime
from email.utils import format_datetime
from pathlib import Path
from typing import Dict, List, Optional

from ..api.exceptions import CopyError, PackageError
from ..constants import DEBIAN_DIR, DEFAULT_DIST_DIR, DEBIAN_DEFAULT_DEPENDS
from ..core.script_runner import ScriptRunner
from ..core.staging import StagingArea
from ..models.config import AppConfig
from ..models.result import PackageResult
from ..models.settings import Settings
from ..models.unit import unit_from_config
from .. import templates
from .build_service import BuildService
from .install_service import InstallService

logger = logging.getLogger(__name__)

EXECUTABLE_FILES = {"rules", "preinst", "postinst", "prerm"}


class PackageService:
    """Generates a Debian source tree for an app and optionally builds it

    The tree looks like::

        dist/<app>-<version>/
        ├── debian/            control, changelog, rules, install, maintainer scripts
        └── <install_path>/<app>/   files the package installs
    """

    def __init__(self,
                 settings: Settings,
                 build_service: Optional[BuildService] = None,
                 install_service: Optional[InstallService] = None,
                 staging: Optional[StagingArea] = None,
                 script_runner: Optional[ScriptRunner] = None):
        self.settings = settings
        self.staging = staging or StagingArea(settings.temp_dir)
        self.script_runner = script_runner or ScriptRunner()
        self.build_service = build_service or BuildService(
            settings, staging=self.staging, script_runner=self.script_runner
        )
        self.install_service = install_service or InstallService(
            settings, staging=self.staging, script_runner=self.script_runner
        )

    def default_output_dir(self, config: AppConfig) -> Path:
        return self.settings.project_root / DEFAULT_DIST_DIR / f"{config.app_name}-{config.version}"

    def package(self, config: AppConfig,
                output_dir: Optional[Path] = None,
                build: bool = True) -> PackageResult:
        """
        Generate the Debian tree and run dpkg-buildpackage

        Args:
            config: Validated app config
            output_dir: Tree location (defaults to dist/<app>-<version>)
            build: Run dpkg-buildpackage after generating the tree

        Returns:
            PackageResult

        Raises:
            CopyError: If files cannot be placed or written
            ScriptError: If the build script fails
            PackageError: If dpkg-buildpackage fails
        """
        result = PackageResult(app_name=config.app_name)
        pkg_dir = Path(output_dir) if output_dir else self.default_output_dir(config)
        result.build_dir = pkg_dir

        self._clear_output_dir(pkg_dir)
        debian_dir = pkg_dir / DEBIAN_DIR
        debian_dir.mkdir(parents=True)

        build_result = self.build_service.build(config)
        try:
            app_root = self._app_root(config, pkg_dir)
            app_root.mkdir(parents=True, exist_ok=True)
            self.install_service.place_files(config, build_result.staging_dir, app_root)

            for name in (config.install_script, config.uninstall_script):
                if name:
                    self.script_runner.stage(
                        config.script_path(name, self.settings.project_root), app_root
                    )
        finally:
            self.staging.cleanup(config.app_name)

        for name, content in self.render_debian(config).items():
            result.debian_files.append(self._write(debian_dir / name, content))

        if build:
            self._dpkg_buildpackage(pkg_dir)
            result.built = True

        result.message = f"Debian tree written to {pkg_dir}"
        result.complete()
        return result

    def _clear_output_dir(self, pkg_dir: Path) -> None:
        """Remove a previously generated tree at pkg_dir

        Only an empty directory or one holding debian/control is removed.

        Raises:
            PackageError: If pkg_dir contains the project or is not a
                generated tree
        """
        target = pkg_dir.resolve()
        project_root = self.settings.project_root.resolve()
        if target == project_root or target in project_root.parents:
            raise PackageError(f"Output directory {pkg_dir} contains the project at {project_root}")

        if not target.exists():
            return
        if not target.is_dir():
            raise PackageError(f"Output path {pkg_dir} exists and is not a directory")
        if not any(target.iterdir()):
            return
        if not (target / DEBIAN_DIR / "control").is_file():
            raise PackageError(
                f"Output directory {pkg_dir} is not empty and holds no {DEBIAN_DIR}/control; refusing to remove it"
            )

        logger.info("Removing previous package tree %s", pkg_dir)
        shutil.rmtree(target)

    def _app_root(self, config: AppConfig, pkg_dir: Path) -> Path:
        install_path = self.settings.install_path
        return pkg_dir / install_path.relative_to(install_path.anchor) / config.app_name

    def render_debian(self, config: AppConfig) -> Dict[str, str]:
        """Render every file of the debian/ directory

        Returns:
            Mapping of file name to content
        """
        install_root = config.install_root(self.settings.install_path)
        unit = unit_from_config(config, self.settings.install_path)
        rel_root = install_root.relative_to(install_root.anchor)

        depends = ", ".join([DEBIAN_DEFAULT_DEPENDS, *config.dependencies])
        variables = {
            "name": config.app_name,
            "version": config.version,
            "maintainer": config.maintainer,
            "depends": depends,
            "description": config.description or f"{config.app_name} application packaged by QuickPackage",
            "date": format_datetime(datetime.now().astimezone()),
        }

        files = {name: templates.render("debian", name, variables)
                 for name in ("control", "changelog", "rules", "preinst")}

        install_lines = [f"{rel_root} {rel_root.parent}/"]
        if config.systemd:
            install_lines.append(f"{DEBIAN_DIR}/{unit.file_name} {self._unit_dir_rel()}/")
            files[unit.file_name] = unit.render()
        files["install"] = "\n".join(install_lines) + "\n"

        files["postinst"] = templates.render("debian", "postinst", {
            "script_commands": self._script_call(install_root, config.install_script),
            "service_commands": self._postinst_service(config, unit),
        })
        files["prerm"] = templates.render("debian", "prerm", {
            "script_commands": self._script_call(install_root, config.uninstall_script),
            "service_commands": self._prerm_service(config, unit),
        })
        return files

    def _unit_dir_rel(self) -> Path:
        unit_dir = self.settings.unit_dir
        return unit_dir.relative_to(unit_dir.anchor)

    @staticmethod
    def _script_call(install_root: Path, script: Optional[str]) -> str:
        if not script:
            return ""
        return f"(cd {shlex.quote(str(install_root))} && ./{shlex.quote(Path(script).name)} \"$@\")"

    @staticmethod
    def _postinst_service(config: AppConfig, unit) -> str:
        if not config.systemd:
            return ""
        lines = ["systemctl daemon-reload"]
        if not unit.is_template:
            lines.append(f"systemctl enable {unit.file_name}")
            lines.append(f"systemctl restart {unit.file_name}")
        return "\n".join(lines)

    @staticmethod
    def _prerm_service(config: AppConfig, unit) -> str:
        if not config.systemd:
            return ""
        target = shlex.quote(unit.wildcard)
        return "\n".join([
            f"systemctl stop {target} || true",
            f"systemctl disable {target} || true",
            "systemctl daemon-reload || true",
        ])

    @staticmethod
    def _write(path: Path, content: str) -> Path:
        try:
            path.write_text(content, encoding="utf-8")
            if path.name in EXECUTABLE_FILES:
                path.chmod(0o755)
            else:
                path.chmod(0o644)
        except OSError as e:
            raise CopyError(f"Failed to write {path}: {e}")
        logger.info("Wrote %s", path)
        return path

    def _dpkg_buildpackage(self, pkg_dir: Path) -> None:
        argv: List[str] = ["dpkg-buildpackage", "-us", "-uc"]
        logger.info("Running %s in %s", shlex.join(argv), pkg_dir)
        try:
            completed = subprocess.run(argv, cwd=str(pkg_dir))
        except OSError as e:
            raise PackageError(f"Failed to run dpkg-buildpackage: {e}")
        if completed.returncode != 0:
            raise PackageError(f"dpkg-buildpackage failed with exit code {completed.returncode}")
