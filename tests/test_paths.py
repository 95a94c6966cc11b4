import pytest

from tern.paths import resolve_cwd
from tern.shell import Shell
from tern.tokens import CommandToken


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src" / "main").mkdir(parents=True)
    return tmp_path


def token(text):
    return CommandToken(text, complete=False)


@pytest.mark.asyncio
async def test_plain_word_is_not_a_path(project):
    resolved = await resolve_cwd(token("src"), project, Shell.BASH)
    assert resolved.cwd == project
    assert resolved.is_path is False


@pytest.mark.asyncio
async def test_no_token(project):
    resolved = await resolve_cwd(None, project, Shell.BASH)
    assert resolved.cwd == project
    assert resolved.is_path is False


@pytest.mark.asyncio
async def test_complete_directory(project):
    resolved = await resolve_cwd(token("src/"), project, Shell.BASH)
    assert resolved.cwd == project / "src"
    assert resolved.is_path is True
    assert resolved.is_path_complete is True


@pytest.mark.asyncio
async def test_partial_segment_lists_parent(project):
    resolved = await resolve_cwd(token("src/ma"), project, Shell.BASH)
    assert resolved.cwd == project / "src"
    assert resolved.is_path is True
    assert resolved.is_path_complete is False


@pytest.mark.asyncio
async def test_missing_parent_is_not_a_path(project):
    resolved = await resolve_cwd(token("missing/dir/x"), project, Shell.BASH)
    assert resolved.cwd == project
    assert resolved.is_path is False


@pytest.mark.asyncio
async def test_complete_token_naming_a_file(project):
    (project / "notes.txt").write_text("")
    resolved = await resolve_cwd(token("notes.txt/"), project, Shell.BASH)
    assert resolved.is_path is False


@pytest.mark.asyncio
async def test_absolute_path(project):
    resolved = await resolve_cwd(token(f"{project / 'src'}/"), "/", Shell.BASH)
    assert resolved.cwd == project / "src"
    assert resolved.is_path_complete is True


@pytest.mark.asyncio
async def test_home_expansion(project, monkeypatch):
    monkeypatch.setenv("HOME", str(project))
    resolved = await resolve_cwd(token("~/src/"), "/", Shell.BASH)
    assert resolved.cwd == project / "src"
    assert resolved.is_path is True
