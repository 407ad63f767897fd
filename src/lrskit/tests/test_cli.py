import json
import logging

import pytest

from lrskit.cli import main


@pytest.fixture(autouse=True)
def fresh_cli_logger():
    # the CLI binds its handler to the sys.stderr of the first call
    yield
    log = logging.getLogger('lrskit')
    for h in list(log.handlers):
        log.removeHandler(h)


def _last_json(out):
    return json.loads(out.strip().splitlines()[-1])


def test_project(capsys):
    assert main(['project', '--line', '0,0 2,0', '--point', '1,1']) == 0
    assert _last_json(capsys.readouterr().out) == {'distance_along_curve': 1, 'offset': 1}


def test_project_start_offset(capsys):
    assert main(['project', '--line', '0,0 2,0', '--point', '1,-1', '--start-offset', '1']) == 0
    assert _last_json(capsys.readouterr().out) == {'distance_along_curve': 2, 'offset': -1}


def test_resolve(capsys):
    assert main(['resolve', '--line', '0,0 2,0', '--distance', '1']) == 0
    assert _last_json(capsys.readouterr().out) == {'x': 1.0, 'y': 0.0}


def test_resolve_outside_fails(capsys):
    assert main(['resolve', '--line', '0,0 2,0', '--distance', '4']) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'not on the curve' in captured.err


def test_normal(capsys):
    assert main(['normal', '--line', '0,0 2,0', '--distance', '1']) == 0
    assert _last_json(capsys.readouterr().out) == {'coords': [[1.0, 0.0], [1.0, 1.0]]}


def test_fragment(capsys):
    assert main(['fragment', '--line', '0,0 2,0', '--max-len', '1']) == 0
    out = _last_json(capsys.readouterr().out)
    assert [f['start_offset'] for f in out] == [0, 1]
    assert [f['length'] for f in out] == [1, 1]


def test_invalid_line(capsys):
    assert main(['project', '--line', '1,1 1,1', '--point', '0,0']) == 1
    assert 'not valid' in capsys.readouterr().err


def test_bad_point_is_an_argument_error():
    with pytest.raises(SystemExit):
        main(['project', '--line', '0,0 2,0', '--point', '1'])


def test_negative_start_offset_is_an_argument_error():
    with pytest.raises(SystemExit):
        main(['project', '--line', '0,0 2,0', '--point', '1,1', '--start-offset', '-1'])
