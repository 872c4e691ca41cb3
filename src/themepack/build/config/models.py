"""
Pydantic models for theme build configuration.
"""
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field


class PackageMetadata(BaseModel):
    """The parts of package.json the build interpolates."""
    model_config = ConfigDict(extra='allow')

    name: str
    version: str


class DeploymentTarget(BaseModel):
    """Remote host the release is synced to (server.config.json)."""
    model_config = ConfigDict(extra='allow')

    username: str
    host: str
    path: str
    port: int = 22

    @property
    def destination(self) -> str:
        return f"{self.username}@{self.host}:{self.path}"


class Paths(BaseModel):
    base: str = '.'
    dist: str = 'dist'
    sass: str = 'scss'
    scripts: str = 'js'


class SassConfig(BaseModel):
    """Options handed to the sass executable, per target."""
    executable: str = 'sass'
    bundle_exec: bool = False
    load_path: List[str] = []
    precision: Optional[int] = None
    sources: List[str] = ['main.scss']
    dest: str = 'css'
    ext: str = '.css'
    targets: Dict[str, Dict[str, Any]] = {}


class RevisionConfig(BaseModel):
    algorithm: str = 'md5'
    length: int = 8
    src: List[str] = []


class WatchConfig(BaseModel):
    sass: List[str] = []
    livereload: List[str] = []
    host: str = 'localhost'
    port: int = 8000
    liveport: int = 35729


class RsyncConfig(BaseModel):
    executable: str = 'rsync'
    args: List[str] = []
    recursive: bool = True
    sync_dest: bool = False
    ssh: bool = True


class BuildLayout(BaseModel):
    """Build layout merged from the packaged defaults and themepack.yaml."""
    paths: Paths = Field(default_factory=Paths)
    placeholder: str
    release_dir: str
    archive: str
    version_files: List[str] = []
    copy_src: List[str] = []
    templates: List[str] = []
    staging: str = '.tmp'
    concat_separator: str = '\n'
    secondary_compile: Optional[str] = None
    clean_release: List[str] = []
    sass: SassConfig = Field(default_factory=SassConfig)
    revision: RevisionConfig = Field(default_factory=RevisionConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    rsync: RsyncConfig = Field(default_factory=RsyncConfig)
