import pytest

from bootstrap.__main__ import build_parser, main_cli_entry


def test_parser_defaults():
    args = build_parser().parse_args(['site'])
    assert args.directory == 'site'
    assert args.auto_pages == 'skip_existing'
    assert args.timeout is None
    assert args.log_level == 'INFO'


@pytest.mark.asyncio
async def test_bootstraps_a_site(site_dir, make_files, capsys):
    make_files(site_dir, {'src/pages/about.js': ''})
    code = await main_cli_entry([str(site_dir), '--log-level', 'WARNING'])
    out = capsys.readouterr().out
    assert code == 0
    assert 'Pages: 1' in out
    assert '/about/' in out
    assert 'Plugins: default-site-plugin' in out
    assert 'Extensions: .js .jsx' in out


@pytest.mark.asyncio
async def test_missing_directory(tmp_path, capsys):
    assert await main_cli_entry([str(tmp_path / 'nope')]) == 1
    assert 'not found' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_fatal_configuration_exits_with_status_1(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        await main_cli_entry([str(tmp_path)])
    assert exc_info.value.code == 1
