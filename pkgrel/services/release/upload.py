from __future__ import annotations

import glob
from collections.abc import Sequence
from pathlib import Path

from pkgrel.core.result import Err, Ok, Result
from pkgrel.services.release.config import ARTIFACT_GLOBS
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.errors import ReleaseError
from pkgrel.services.release.gh import create_prerelease, edit_release_notes, upload_asset
from pkgrel.services.release.semver import last_release
from pkgrel.services.release.version import next_version


def find_artifacts(root: Path, patterns: Sequence[str] = ARTIFACT_GLOBS) -> list[Path]:
    """Files matching ``patterns`` in pattern order, sorted within a pattern."""
    found: list[Path] = []
    for pattern in patterns:
        expanded = Path(pattern).expanduser()
        base = expanded if expanded.is_absolute() else root / expanded
        found.extend(Path(p) for p in sorted(glob.glob(str(base))) if Path(p).is_file())
    return found


def release_notes(names: Sequence[str]) -> str:
    return "".join(f"- {name}\n" for name in names)


def upload_to_release(
    ctx: ReleaseContext, *, patterns: Sequence[str] = ARTIFACT_GLOBS
) -> Result[None, ReleaseError]:
    """Create the ``v<next version>`` pre-release and attach build artifacts.

    An existing release is left untouched.
    """
    tags = ctx.repo.tags()
    last = last_release(tags.value) if isinstance(tags, Ok) else None

    version = next_version(ctx, last=last)
    if version is None:
        ctx.console.warning("cannot infer the next version; nothing to upload")
        return Ok(None)

    tag = f"v{version}"
    created = create_prerelease(ctx, tag=tag)
    if isinstance(created, Err):
        ctx.console.info(f"release {tag} already exists")
        ctx.console.debug(created.error.pretty())
        return Ok(None)

    artifacts = find_artifacts(ctx.settings.root, patterns)
    if not artifacts:
        ctx.console.warning("no build artifacts found")

    uploaded: list[str] = []
    for path in artifacts:
        result = upload_asset(ctx, tag=tag, path=path, name=path.name)
        if isinstance(result, Err):
            return result
        uploaded.append(path.name)
        ctx.console.success(f"uploaded {path.name}")

    edited = edit_release_notes(ctx, tag=tag, notes=release_notes(uploaded))
    if isinstance(edited, Err):
        return edited

    ctx.console.success(f"release {tag}: {len(uploaded)} asset(s)")
    return Ok(None)
