"""Unit tests for commit history parsing."""

import tempfile
from datetime import date
from pathlib import Path

import git
import pytest

from flowguard.parsers.commits import (
    RepositoryCommitReader,
    parse_commit_csv,
    read_repository_commits,
)


@pytest.fixture
def test_repo():
    """Create a temporary Git repository for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = git.Repo.init(repo_path)

        # Configure git
        repo.config_writer().set_value("user", "name", "Test User").release()
        repo.config_writer().set_value("user", "email", "test@example.com").release()

        (repo_path / "README.md").write_text("# Test Project\n")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")

        (repo_path / "main.py").write_text("def hello():\n    print('Hello, World!')\n")
        repo.index.add(["main.py"])
        repo.index.commit("Add main.py")

        (repo_path / "main.py").write_text("def hello():\n    print('Hello, FlowGuard!')\n")
        repo.index.add(["main.py"])
        repo.index.commit("hotfix: update hello message\n\nLonger body text.")

        yield repo_path


def test_parse_basic_csv():
    """Test parsing a plain commit log export."""
    text = (
        "sha,author,date,message\n"
        "a1b2c3,Dev A,2025-01-05,feat: initial auth setup\n"
        "b2c3d4,Dev B,2025-01-07,feat: dashboard layout\n"
    )

    commits = parse_commit_csv(text)

    assert len(commits) == 2
    assert commits[0].sha == "a1b2c3"
    assert commits[0].author == "Dev A"
    assert commits[0].date == date(2025, 1, 5)
    assert commits[1].message == "feat: dashboard layout"


def test_parse_quoted_message_with_commas():
    """Test that quoted fields keep embedded commas."""
    text = 'sha,author,date,message\nabc,Dev A,2025-01-05,"fix: a, b and c"\n'

    commits = parse_commit_csv(text)

    assert len(commits) == 1
    assert commits[0].message == "fix: a, b and c"


def test_parse_header_aliases_and_case():
    """Test alternative header names in mixed case."""
    text = (
        "Hash,Author Name,Authored Date,Commit Message\n"
        "abc,Dev A,2025-02-01,WIP: payments\n"
    )

    commits = parse_commit_csv(text)

    assert len(commits) == 1
    assert commits[0].sha == "abc"
    assert commits[0].author == "Dev A"
    assert commits[0].date == date(2025, 2, 1)
    assert commits[0].message == "WIP: payments"


def test_parse_defaults_for_missing_fields():
    """Test default sha and author when cells are empty."""
    text = "sha,author,date,message\n,,2025-01-05,something\n"

    commits = parse_commit_csv(text)

    assert len(commits) == 1
    assert commits[0].sha == "unknown"
    assert commits[0].author == "Unknown"


def test_parse_drops_rows_without_valid_date():
    """Test rows with missing or unparsable dates are dropped."""
    text = (
        "sha,author,date,message\n"
        "a,Dev A,,no date\n"
        "b,Dev B,not-a-date,bad date\n"
        "c,Dev C,2025-01-10,good\n"
    )

    commits = parse_commit_csv(text)

    assert [c.sha for c in commits] == ["c"]


def test_parse_skips_blank_lines():
    """Test blank lines are ignored."""
    text = "sha,author,date,message\n\na,Dev A,2025-01-05,one\n\n"

    assert len(parse_commit_csv(text)) == 1


@pytest.mark.parametrize("text", ["", "   \n", "sha,author,date,message\n"])
def test_parse_empty_input(text):
    """Test empty or header-only input gives no commits."""
    assert parse_commit_csv(text) == []


def test_reader_initialization(test_repo):
    """Test RepositoryCommitReader initialization."""
    reader = RepositoryCommitReader(test_repo)

    assert reader.repo_path == test_repo
    assert reader.repo is not None


def test_reader_invalid_path():
    """Test RepositoryCommitReader with invalid repository path."""
    with pytest.raises(ValueError, match="Repository path does not exist"):
        RepositoryCommitReader(Path("/nonexistent/path"))


def test_reader_not_a_repository():
    """Test RepositoryCommitReader with a directory that is not a repository."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ValueError, match="Invalid Git repository"):
            RepositoryCommitReader(Path(tmpdir))


def test_iter_commits(test_repo):
    """Test reading all commits, newest first."""
    reader = RepositoryCommitReader(test_repo)

    commits = list(reader.iter_commits())

    assert len(commits) == 3
    assert commits[0].message == "hotfix: update hello message"
    assert commits[1].message == "Add main.py"
    assert commits[2].message == "Initial commit"
    assert all(c.author == "Test User" for c in commits)
    assert all(len(c.sha) == 40 for c in commits)


def test_iter_commits_with_max_count(test_repo):
    """Test reading commits with max count limit."""
    reader = RepositoryCommitReader(test_repo)

    commits = list(reader.iter_commits(max_count=2))

    assert len(commits) == 2


def test_read_repository_commits(test_repo):
    """Test the list-returning convenience function."""
    commits = read_repository_commits(test_repo)

    assert len(commits) == 3
    assert commits[0].date == date.today()
