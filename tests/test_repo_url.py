import pytest

from package_check import (
    MalformedRepoURLError,
    UnrecognizedHost,
    normalize_repo_url,
    resolve_asset_url,
)
from package_check.repo_url import REWRITE_STEPS

REFERENCES = [
    "owner/repo",
    "github:owner/repo",
    "gitlab:group/project",
    "bitbucket:team/repo",
    "git@github.com:owner/repo.git",
    "git@bitbucket.org:team/repo.git",
    "git+https://github.com/owner/repo.git",
    "git+ssh://git@github.com/owner/repo.git",
    "git://github.com/owner/repo.git",
    "http://github.com/owner/repo",
    "http  ://github.com/owner/repo",
    "//gitlab.com/group/project",
    "https://github.com/owner/repo/tree/main/packages/core",
    "https://git.example.com/team/repo.git",
    "sourceforge.net/projects/thing",
    "  https://github.com/owner/repo.git  ",
    "o/gitlab .git",
    "git@//git@github.com/o/r",
    "github:o/r .git",
]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("git@github.com:o/r.git", "https://github.com/o/r"),
        ("github:o/r", "https://github.com/o/r"),
        ("gitlab:o/r", "https://gitlab.com/o/r"),
        ("bitbucket:o/r", "https://bitbucket.org/o/r"),
        ("o/r", "https://github.com/o/r"),
        ("git+https://github.com/o/r.git", "https://github.com/o/r"),
        ("git+ssh://git@github.com/o/r.git", "https://github.com/o/r"),
        ("git://github.com/o/r.GIT", "https://github.com/o/r"),
        ("git@gitlab.com:group/sub/project.git", "https://gitlab.com/group/sub/project"),
        ("http://github.com/o/r", "https://github.com/o/r"),
        ("http  ://github.com/o/r", "https://github.com/o/r"),
        ("//github.com/o/r", "https://github.com/o/r"),
        ("  https://github.com/o/r\n", "https://github.com/o/r"),
        ("https://github.com/o/r", "https://github.com/o/r"),
        ("https://gitlab.example.com/group/project.git", "https://gitlab.example.com/group/project"),
        ("sourceforge.net/p/thing", "https://sourceforge.net/p/thing"),
        ("github:o/r .git", "https://github.com/o/r"),
        ("o/gitlab .git", "https://o/gitlab"),
        ("git@//git@github.com/o/r", "https://github.com/o/r"),
    ],
)
def test_normalize_repo_url(raw: str, expected: str) -> None:
    assert normalize_repo_url(raw) == expected


@pytest.mark.parametrize("raw", REFERENCES)
def test_normalize_is_idempotent_and_https(raw: str) -> None:
    once = normalize_repo_url(raw)
    assert once.startswith("https://")
    assert normalize_repo_url(once) == once


def test_git_plus_and_suffix_stripping_match_plain_url() -> None:
    assert normalize_repo_url("git+https://github.com/o/r.git") == normalize_repo_url(
        "https://github.com/o/r"
    )


def test_repeated_git_markers_are_stripped_in_one_pass() -> None:
    assert normalize_repo_url("git+git+https://github.com/o/r.git.git") == "https://github.com/o/r"
    assert normalize_repo_url("git@git@github.com:o/r") == "https://github.com/o/r"


def test_rewrite_steps_run_in_documented_order() -> None:
    assert [step.name for step in REWRITE_STEPS] == [
        "strip-git-plus",
        "strip-dot-git",
        "strip-git-at",
        "scp-host-colon",
        "bitbucket-shorthand",
        "github-gitlab-shorthand",
        "bare-github-shorthand",
        "force-https",
    ]


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "git+", ".git", "https://example.com:notaport/o/r", "https://exa mple.com/o/r"],
)
def test_normalize_rejects_unparseable_references(raw: str) -> None:
    with pytest.raises(MalformedRepoURLError):
        normalize_repo_url(raw)


def test_malformed_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        normalize_repo_url("")


def test_github_asset_defaults_to_head() -> None:
    assert (
        resolve_asset_url("https://github.com/o/r", "package.json")
        == "https://raw.githubusercontent.com/o/r/HEAD/package.json"
    )


def test_github_tree_url_replaces_branch_with_version() -> None:
    assert (
        resolve_asset_url("https://github.com/o/r/tree/main/sub", "x.ts", "v1.0.0")
        == "https://raw.githubusercontent.com/o/r/v1.0.0/sub/x.ts"
    )


@pytest.mark.parametrize(
    ("raw", "file_path", "version", "expected"),
    [
        (
            "https://github.com/o/r/tree/main",
            "x.ts",
            "v1",
            "https://raw.githubusercontent.com/o/r/v1/x.ts",
        ),
        (
            "https://github.com/o/r/tree",
            "x.ts",
            None,
            "https://raw.githubusercontent.com/o/r/HEAD/x.ts",
        ),
        (
            "https://github.com/o/r/tree/dev/packages/core/",
            "/src/index.ts",
            "abc123",
            "https://raw.githubusercontent.com/o/r/abc123/packages/core/src/index.ts",
        ),
        (
            "https://github.com/o/tree/tree/main/pkg",
            "package.json",
            None,
            "https://raw.githubusercontent.com/o/tree/HEAD/pkg/package.json",
        ),
        (
            "git@github.com:o/r.git",
            "docs/../package.json",
            "",
            "https://raw.githubusercontent.com/o/r/HEAD/package.json",
        ),
        (
            "HTTPS://GitHub.com/o/r/",
            "README.md",
            "  ",
            "https://raw.githubusercontent.com/o/r/HEAD/README.md",
        ),
    ],
)
def test_github_asset_paths(raw: str, file_path: str, version: str | None, expected: str) -> None:
    assert resolve_asset_url(raw, file_path, version) == expected


def test_bitbucket_asset() -> None:
    assert (
        resolve_asset_url("https://bitbucket.org/o/r", "f.md", "dev")
        == "https://bitbucket.org/o/r/dev/f.md"
    )
    assert (
        resolve_asset_url("bitbucket:o/r", "/docs//f.md")
        == "https://bitbucket.org/o/r/HEAD/docs/f.md"
    )


def test_gitlab_asset() -> None:
    assert (
        resolve_asset_url("https://gitlab.com/o/r", "f.md")
        == "https://gitlab.com/o/r/-/raw/HEAD/f.md"
    )
    assert (
        resolve_asset_url("git@gitlab.com:group/sub/project.git", "README.md", "v2")
        == "https://gitlab.com/group/sub/project/-/raw/v2/README.md"
    )


@pytest.mark.parametrize(
    "raw",
    ["https://sr.ht/o/r", "https://www.github.com/o/r", "https://gitlab.example.com/g/p"],
)
def test_unrecognized_host_is_a_result_not_an_error(raw: str) -> None:
    result = resolve_asset_url(raw, "f.md")

    assert isinstance(result, UnrecognizedHost)
    assert result.url == normalize_repo_url(raw)
    assert result.hostname == result.url.split("/")[2].lower()


def test_resolve_propagates_malformed_reference() -> None:
    with pytest.raises(MalformedRepoURLError):
        resolve_asset_url("", "package.json")
