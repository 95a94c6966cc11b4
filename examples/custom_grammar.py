#!/usr/bin/env python
import asyncio

from tern import Catalog, SuggestionEngine
from tern.probe import ShellProbe
from tern.spec.model import (
    ArgumentSlot,
    GeneratorLoader,
    Option,
    SpecFragment,
    SubcommandNode,
    Unresolved,
)
from tern.utils import setup_logging

setup_logging(log_filename=None)


async def git_aliases(command: str, probe: ShellProbe) -> SpecFragment:
    result = await probe("git", ["config", "--get-regexp", r"^alias\."])
    lines = result.stdout.splitlines() if result.ok else []
    names = [line.split()[0].removeprefix("alias.") for line in lines if line.strip()]
    return SpecFragment(children=[SubcommandNode((name,)) for name in names])


deploy = SubcommandNode(
    names=("deploy",),
    description="Deploy services",
    options=[
        Option(("--verbose", "-v"), is_persistent=True),
        Option(("--env", "-e"), [ArgumentSlot("env", suggestions=["prod", "stage"])]),
    ],
    children=[
        SubcommandNode(
            ("run",),
            argument_slots=[
                ArgumentSlot("services", is_variadic=True, template="filepaths")
            ],
        ),
        SubcommandNode(
            ("alias",), definition=Unresolved(GeneratorLoader(git_aliases))
        ),
    ],
)

engine = SuggestionEngine(Catalog.from_mapping({"deploy": deploy}))


async def main():
    for line in ["dep", "deploy ", "deploy --env ", "deploy -v run ", "deploy alias "]:
        result = await engine.get_suggestions(line, ".")
        if result is None:
            print(f"{line!r}: no suggestions")
            continue
        names = ", ".join(s.display for s in result.suggestions)
        print(f"{line!r} (drop {result.characters_to_drop}): {names}")


if __name__ == "__main__":
    asyncio.run(main())
