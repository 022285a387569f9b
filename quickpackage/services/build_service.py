"""Build stage: stage build files and run the build script"""

import logging
from typing import Optional

from ..core.path_resolver import PathResolver
from ..core.script_runner import ScriptRunner
from ..core.staging import StagingArea
from ..models.config import AppConfig
from ..models.result import BuildResult
from ..models.settings import Settings

logger = logging.getLogger(__name__)


class BuildService:
    """Resolves build files into a fresh staging directory and builds there"""

    def __init__(self,
                 settings: Settings,
                 staging: Optional[StagingArea] = None,
                 script_runner: Optional[ScriptRunner] = None):
        """
        Initialize build service

        Args:
            settings: Runtime settings
            staging: Staging area (defaults to one in settings.temp_dir)
            script_runner: Script runner
        """
        self.settings = settings
        self.staging = staging or StagingArea(settings.temp_dir)
        self.script_runner = script_runner or ScriptRunner()
        self.path_resolver = PathResolver(settings.project_root)

    def build(self, config: AppConfig) -> BuildResult:
        """
        Stage build files and run the build script

        Args:
            config: Validated app config

        Returns:
            BuildResult carrying the staging directory

        Raises:
            GlobError: If a build pattern is malformed
            PathError: If a match cannot be placed relative to the project
            CopyError: If copying fails or the build script is missing
            ScriptError: If the build script exits non-zero
        """
        result = BuildResult(app_name=config.app_name)

        staging_dir = self.staging.create(config.app_name)
        result.staging_dir = staging_dir

        for pattern in config.build_files:
            copied = self.path_resolver.copy(pattern, staging_dir)
            if not copied:
                result.add_warning(f"Build pattern '{pattern}' matched no files")
            result.copied.extend(copied)

        if config.build_script:
            source = config.script_path(config.build_script, self.settings.project_root)
            logger.info("Running build script %s", config.build_script)
            self.script_runner.stage_and_run(source, staging_dir)
            result.script_ran = True

        result.message = f"Staged {len(result.copied)} path(s) in {staging_dir}"
        result.complete()
        return result
