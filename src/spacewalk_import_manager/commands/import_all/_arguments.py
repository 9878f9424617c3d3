import datetime
from pathlib import Path
from typing import Protocol


class ArgumentOptions(Protocol):
    """Options that end up on an importer's command line."""

    directory: Path
    into_org_id: str | None
    merge_users: bool


def _passwords_file(now: datetime.datetime | None) -> str:
    stamp = (now or datetime.datetime.now(datetime.UTC)).astimezone(datetime.UTC)
    return f"passwords_{stamp.strftime('%Y-%m-%dT%H:%M:%SZ')}.csv"


def build_args(
    name: str,
    import_file: Path,
    options: ArgumentOptions,
    now: datetime.datetime | None = None,
) -> list[str]:
    """Builds the importer arguments for an entity.

    Most entities only need to know where their csv is, a few need more:
    organization may be redirected into an existing org,
    content-view reads a whole directory of channel exports
    and user writes the passwords it generates to a new file.
    """
    args = ["--csv-file", str(import_file)]
    if name == "organization":
        if options.into_org_id is not None:
            args += ["--into-org-id", options.into_org_id]
    elif name == "content-view":
        channels = options.directory / "CHANNELS"
        args = ["--csv-file", str(channels / "export.csv"), "--dir", str(channels)]
    elif name == "user":
        args += ["--new-passwords", _passwords_file(now)]
        if options.merge_users:
            args.append("--merge-users")

    return args
