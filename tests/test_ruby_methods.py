"""Tests for specparity.ruby.methods and specparity.ruby.visibility."""

import textwrap

import pytest

pytest.importorskip("tree_sitter_language_pack")

from specparity.enums import MethodKind, Visibility  # noqa: E402
from specparity.ruby.methods import extract_methods_from_source  # noqa: E402


USER_MODEL = """\
class User < ApplicationRecord
  def self.find_by_token(token)
    find_by(token: token)
  end

  def save
    super
  end

  protected

  def compare(other)
    id <=> other.id
  end

  private

  def helper
    :help
  end

  def self.build
    new
  end

  public

  def visible
    true
  end

  private def wrapped
    :wrapped
  end

  def after_wrapped
    :after
  end

  class << self
    def from_hash(hash)
      new(**hash)
    end
  end
end
"""


@pytest.fixture(scope="module")
def sites():
    return {s.name: s for s in extract_methods_from_source(USER_MODEL)}


class TestExtraction:
    def test_source_order(self):
        names = [s.name for s in extract_methods_from_source(USER_MODEL)]
        assert names == [
            "find_by_token", "save", "compare", "helper", "build",
            "visible", "wrapped", "after_wrapped", "from_hash",
        ]

    def test_kinds(self, sites):
        assert sites["find_by_token"].kind is MethodKind.CLASS
        assert sites["build"].kind is MethodKind.CLASS
        assert sites["from_hash"].kind is MethodKind.CLASS
        assert sites["save"].kind is MethodKind.INSTANCE

    def test_locations(self, sites):
        site = sites["find_by_token"]
        assert (site.line, site.column) == (2, 2)
        assert site.end_line == 4

    def test_qualified_name(self, sites):
        assert sites["save"].qualified_name == "#save"
        assert sites["build"].qualified_name == ".build"

    def test_no_methods(self):
        assert extract_methods_from_source("puts 'hello'\n") == []


class TestVisibility:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("find_by_token", Visibility.PUBLIC),
            ("save", Visibility.PUBLIC),
            ("compare", Visibility.PROTECTED),
            ("helper", Visibility.PRIVATE),
            ("build", Visibility.PUBLIC),
            ("visible", Visibility.PUBLIC),
            ("wrapped", Visibility.PRIVATE),
            ("after_wrapped", Visibility.PUBLIC),
            ("from_hash", Visibility.PUBLIC),
        ],
    )
    def test_modifier_fold(self, sites, name, expected):
        assert sites[name].visibility is expected

    def test_is_public(self, sites):
        assert sites["save"].is_public
        assert not sites["helper"].is_public

    def test_nested_class_starts_public(self):
        code = textwrap.dedent("""\
            module Billing
              private

              class Invoice
                def total
                  lines.sum(&:amount)
                end
              end

              def hidden
              end
            end
        """)
        sites = {s.name: s for s in extract_methods_from_source(code)}
        assert sites["total"].visibility is Visibility.PUBLIC
        assert sites["hidden"].visibility is Visibility.PRIVATE

    def test_top_level_def_is_public(self):
        [site] = extract_methods_from_source("def helper\n  1\nend\n")
        assert site.visibility is Visibility.PUBLIC
        assert site.kind is MethodKind.INSTANCE

    def test_later_modifier_does_not_apply_backwards(self):
        code = textwrap.dedent("""\
            class Job
              def perform
              end
              private
            end
        """)
        [site] = extract_methods_from_source(code)
        assert site.visibility is Visibility.PUBLIC
