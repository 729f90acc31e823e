"""Tests for specparity.scan and the scan command."""

import json

import pytest

pytest.importorskip("tree_sitter_language_pack")

from specparity.cli import main  # noqa: E402
from specparity.config import AuditConfig, default_config  # noqa: E402
from specparity.scan import scan_paths  # noqa: E402

CREATOR = """\
class UserCreator
  def call
    if admin?
      create_admin
    elsif guest?
      create_guest
    else
      create_user
    end
  end

  def undocumented
    :x
  end
end
"""

CREATOR_SPEC = """\
RSpec.describe UserCreator do
  let!(:user) { create(:user) }

  describe '#call' do
    context 'when admin' do
      it 'creates an admin' do
      end
    end
  end
end
"""

VIEW_HELPER = """\
class Formatter
  def format
    value ? value.to_s : ''
  end
end
"""


@pytest.fixture()
def project(project_root, write_rb, monkeypatch):
    write_rb("app/services/user_creator.rb", CREATOR)
    write_rb("spec/services/user_creator_spec.rb", CREATOR_SPEC)
    write_rb("app/views/formatter.rb", VIEW_HELPER)
    write_rb("vendor/bundle/gem/app/models/thing.rb", "class Thing\n  def x\n  end\nend\n")
    monkeypatch.setattr("specparity.utils.NO_COLOR", True)
    monkeypatch.setattr("specparity.cli.load_config", lambda: default_config())
    return project_root


# ---------------------------------------------------------------------------
# scan_paths
# ---------------------------------------------------------------------------

class TestScanPaths:
    def test_all_cops(self, project):
        result = scan_paths(".", AuditConfig())
        assert result.files_inspected == 3
        summary = [(f["detector"], f["file"], f["name"]) for f in result.findings]
        assert summary == [
            ("SpecParity/SufficientContexts", "app/services/user_creator.rb", "call"),
            ("SpecParity/PublicMethodHasSpec", "app/services/user_creator.rb", "undocumented"),
            ("SpecParity/NoLetBang", "spec/services/user_creator_spec.rb", "let!"),
        ]

    def test_disabled_cops(self, project):
        config = AuditConfig(
            disabled_cops=frozenset({"SpecParity/NoLetBang", "SpecParity/PublicMethodHasSpec"})
        )
        result = scan_paths(".", config)
        assert [f["detector"] for f in result.findings] == ["SpecParity/SufficientContexts"]

    def test_exclusions(self, project):
        result = scan_paths(".", AuditConfig(), exclusions=["spec"])
        assert all(f["detector"] != "SpecParity/NoLetBang" for f in result.findings)

    def test_single_file(self, project):
        result = scan_paths("spec/services/user_creator_spec.rb", AuditConfig())
        assert result.files_inspected == 1
        assert [f["name"] for f in result.findings] == ["let!"]

    def test_grammar_unavailable_checks_specs_only(self, project, monkeypatch, capsys):
        monkeypatch.setattr("specparity.scan.is_available", lambda: False)
        result = scan_paths(".", AuditConfig())
        assert "app/services/user_creator.rb" in result.files_skipped
        assert [f["detector"] for f in result.findings] == ["SpecParity/NoLetBang"]
        assert "Ruby grammar unavailable" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------

class TestScanCommand:
    def test_exit_code_with_findings(self, project, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["scan"])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "app/services/user_creator.rb:2:3: C: SpecParity/SufficientContexts:" in out
        assert out.rstrip().endswith("3 files inspected, 3 offenses detected")

    def test_json_output(self, project, capsys):
        with pytest.raises(SystemExit):
            main(["scan", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["count"] == 3
        assert payload["files_inspected"] == 3

    def test_only(self, project, capsys):
        with pytest.raises(SystemExit):
            main(["scan", "--json", "--only", "SpecParity/NoLetBang"])
        payload = json.loads(capsys.readouterr().out)
        assert [f["detector"] for f in payload["findings"]] == ["SpecParity/NoLetBang"]

    def test_clean_scan_returns_normally(self, project, capsys):
        main(["--exclude", "spec", "scan", "--path", "app/views"])
        assert "1 file inspected, no offenses detected" in capsys.readouterr().out
