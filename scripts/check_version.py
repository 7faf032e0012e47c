import sys
from pathlib import Path


def check_version(version_tag: str) -> None:
    # v0.1.0 -> 0.1.0
    version = version_tag.lstrip("v")

    root = Path(__file__).parent.parent
    pyproject_path = root / "pyproject.toml"
    changelog_path = root / "CHANGELOG.md"
    package_init = root / "src" / "hosted_agent_lib" / "__init__.py"

    errors = []

    if not pyproject_path.exists():
        errors.append(f"Error: {pyproject_path} not found.")
    else:
        expected_line = f'version = "{version}"'
        if expected_line not in pyproject_path.read_text(encoding="utf-8"):
            errors.append(
                f"Error: Version {version} does not match version in pyproject.toml (expected '{expected_line}')"
            )

    if not changelog_path.exists():
        errors.append(f"Error: {changelog_path} not found.")
    else:
        expected_header = f"[{version}]"
        if expected_header not in changelog_path.read_text(encoding="utf-8"):
            errors.append(f"Error: Version {version} not found in CHANGELOG.md (expected header '{expected_header}')")

    if not package_init.exists():
        errors.append(f"Error: {package_init} not found.")
    else:
        expected_version = f'__version__ = "{version}"'
        if expected_version not in package_init.read_text(encoding="utf-8"):
            errors.append(f"Error: Version {version} does not match __version__ in {package_init.name}")

    if errors:
        print("\n".join(errors))
        sys.exit(1)

    print(f"Version {version} consistency check passed.")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python check_version.py <version>")
        sys.exit(1)

    check_version(sys.argv[1])
