"""End-to-end tests: create a blueprint, customise it, generate instances.

These exercise the real file system, real hook scripts and the CLI entry
point together.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from bpgen.actions import create_blank, generate
from bpgen.cli import main
from bpgen.config import Config
from bpgen.utils import LogBuffer

pytestmark = pytest.mark.integration


COMPONENT_TEMPLATE = """\
export const {{ blueprintInstance_PascalCaseFormat }} = () => (
  <div className="{{ blueprintInstance_DashedFormat }}">{{ title }}</div>
);
"""

PRE_HOOK = """\
def run(data, libraries):
    libraries.fs.write_json(
        data["blueprintInstanceDestination"] + "/manifest.json",
        {
            "name": data["blueprintInstance_ClassFormat"],
            "plural": data["blueprintInstance_DashedFormatPluralized"],
            "props": libraries.collections.uniq(data.get("props") or []),
        },
    )
"""

POST_HOOK = """\
async def run(data, libraries):
    index = data["blueprintInstanceDestination"] + "/index.txt"
    libraries.fs.output_file(index, data["blueprintInstance_PascalCaseFormat"] + "\\n")
"""


@pytest.fixture
async def component_blueprint(config: Config) -> Path:
    log = LogBuffer(quiet=True)
    result = await create_blank("component", config=config, log=log)
    assert result.success, result.output

    location = config.blueprint_path("component")
    template = location / config.instance_dir / "__blueprintInstance_PascalCaseFormat__.jsx"
    template.write_text(COMPONENT_TEMPLATE, encoding="utf-8")
    (location / "scripts" / "pre_generate.py").write_text(PRE_HOOK, encoding="utf-8")
    (location / "scripts" / "post_generate.py").write_text(POST_HOOK, encoding="utf-8")
    return location


class TestGenerateEndToEnd:
    async def test_full_lifecycle(self, component_blueprint: Path, config: Config):
        log = LogBuffer(quiet=True)
        result = await generate(
            "component",
            "user-profile",
            destination="src/components",
            args=["title=Profile", "props[]=id", "props[]=id", "props[]=name"],
            config=config,
            log=log,
        )

        assert result.success, result.output
        out = config.current_path / "src" / "components"
        assert (out / "UserProfile.jsx").read_text(encoding="utf-8") == (
            "export const UserProfile = () => (\n"
            '  <div className="user-profile">Profile</div>\n'
            ");\n"
        )
        manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
        assert manifest == {"name": "UserProfile", "plural": "user-profiles", "props": ["id", "name"]}
        assert (out / "index.txt").read_text(encoding="utf-8") == "UserProfile\n"

    async def test_regenerating_overwrites(self, component_blueprint: Path, config: Config):
        log = LogBuffer(quiet=True)
        await generate("component", "Card", args=["title=One"], config=config, log=log)
        await generate("component", "Card", args=["title=Two"], config=config, log=log)
        assert "Two" in (config.current_path / "Card.jsx").read_text(encoding="utf-8")

    def test_cli_round_trip(self, config: Config, tmp_path: Path):
        source = tmp_path / "seed"
        (source / "__blueprintInstance__").mkdir(parents=True)
        (source / "__blueprintInstance__" / "README.md").write_text(
            "# {{ blueprintInstance_ConstantFormat }}\n", encoding="utf-8"
        )

        with patch("bpgen.cli.Config.from_env", return_value=config):
            assert main(["new", "docs", "--source", str(source)]) == 0
            assert main(["generate", "docs", "api-client"]) == 0

        readme = config.current_path / "api-client" / "README.md"
        assert readme.read_text(encoding="utf-8") == "# API_CLIENT\n"
