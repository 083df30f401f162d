from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = ('.js', '.jsx')
DEFAULT_FRONTMATTER_EXTENSIONS: Tuple[str, ...] = ('.md', '.markdown')

AUTO_PAGES_SKIP_EXISTING = 'skip_existing'
AUTO_PAGES_OVERWRITE = 'overwrite'
AUTO_PAGE_POLICIES = (AUTO_PAGES_SKIP_EXISTING, AUTO_PAGES_OVERWRITE)


@dataclass
class BootstrapConfig:
    """Program configuration for one bootstrap run."""
    directory: Path
    env: Optional[str] = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    frontmatter_extensions: Tuple[str, ...] = DEFAULT_FRONTMATTER_EXTENSIONS
    pages_dir: str = 'src/pages'
    cache_dir: str = '.cache'
    public_dir: str = 'public'
    auto_page_policy: str = AUTO_PAGES_SKIP_EXISTING
    exit_on_fatal: bool = False
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)
        if self.auto_page_policy not in AUTO_PAGE_POLICIES:
            raise ValueError(f"auto_page_policy must be one of {AUTO_PAGE_POLICIES}, got '{self.auto_page_policy}'")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError('timeout_seconds must be positive')

    @property
    def pages_directory(self) -> Path:
        return self.directory / self.pages_dir

    @property
    def cache_directory(self) -> Path:
        return self.directory / self.cache_dir

    @property
    def public_directory(self) -> Path:
        return self.directory / self.public_dir

    @classmethod
    def from_params(cls, directory: str | Path, **kwargs) -> 'BootstrapConfig':
        """Create BootstrapConfig from CLI-style keyword arguments."""
        return cls(
            directory=Path(directory).expanduser().resolve(),
            env=kwargs.get('env'),
            extensions=tuple(kwargs.get('extensions') or DEFAULT_EXTENSIONS),
            frontmatter_extensions=tuple(kwargs.get('frontmatter_extensions') or DEFAULT_FRONTMATTER_EXTENSIONS),
            pages_dir=kwargs.get('pages_dir', 'src/pages'),
            auto_page_policy=kwargs.get('auto_page_policy', AUTO_PAGES_SKIP_EXISTING),
            exit_on_fatal=kwargs.get('exit_on_fatal', False),
            timeout_seconds=kwargs.get('timeout_seconds'),
        )
