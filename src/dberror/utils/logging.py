from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "dberror"


def get_project_version(default: str = "unknown") -> str:
    """
    Installed version of the dberror distribution, or ``default`` when
    running from a source tree that was never installed.
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return default


__all__ = ["DISTRIBUTION_NAME", "get_project_version"]
