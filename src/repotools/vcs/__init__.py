from .git import GitClient

__all__ = ["GitClient"]
