from dataclasses import dataclass
from datetime import date
from functools import partial

from argbind import (
    BindOptions,
    DateAdapter,
    IdentityAdapter,
    Int16,
    argument,
    option,
    parse_args,
    var_args,
)
from argbind.utils import setup_logging

setup_logging(mode="cli")


@dataclass
class CopyArgs:
    source: str = argument(0, description="File to copy.")
    target: str = argument(1, mandatory=False, default=".", description="Destination.")
    verbose: bool = option("v", "verbose", description="Print every copied file.")
    retries: Int16 = option("r", "retries", expects_value=True, default=3)
    since: date | None = option(
        "s",
        "since",
        expects_value=True,
        adapter=partial(DateAdapter, "%Y%m%d"),
        default=None,
        description="Only copy files changed since YYYYMMDD.",
    )
    extra: list[str] = var_args(IdentityAdapter, description="More files to copy.")


if __name__ == "__main__":
    args = parse_args(CopyArgs, options=BindOptions(program="copy"))
    if args is not None:
        print(args)
