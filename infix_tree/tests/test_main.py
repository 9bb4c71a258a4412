import json

import pytest

from infix_tree.main import main


def test_expression_to_stdout(capsys):
    assert main(['1 + 2 * 3', '--operators', '+', '*']) == 0
    assert capsys.readouterr().out.strip() == '(+ 1 (* 2 3))'


def test_format_option(capsys):
    assert main(['- 1', '--operators', '-', '--format', 'infix']) == 0
    assert capsys.readouterr().out.strip() == '(_ - 1)'


def test_malformed_expression_exit_code(capsys):
    assert main(['p q * r s', '--operators', '*']) == 1
    assert 'Malformed expression' in capsys.readouterr().err


def test_input_and_output_files(tmp_path, rules_file):
    src = tmp_path / 'exprs.txt'
    src.write_text('1 + 2\n- 3\n', encoding='utf-8')
    out = tmp_path / 'trees.json'
    code = main(['--input', str(src), '--output', str(out), '--rules', str(rules_file), '--format', 'json'])
    assert code == 0
    trees = json.loads(out.read_text(encoding='utf-8'))
    assert [t['label'] for t in trees] == ['+', '-']


def test_missing_input_file(tmp_path, capsys):
    assert main(['--input', str(tmp_path / 'missing.txt')]) == 2
    assert 'Input file not found' in capsys.readouterr().err


def test_missing_rules_file(tmp_path, capsys):
    assert main(['a', '--rules', str(tmp_path / 'missing.yaml')]) == 2
    assert 'Rules file not found' in capsys.readouterr().err


def test_invalid_rules_file(tmp_path, capsys):
    bad = tmp_path / 'bad.yaml'
    bad.write_text('operators: 3\n', encoding='utf-8')
    assert main(['a', '--rules', str(bad)]) == 2
    assert 'Invalid rules' in capsys.readouterr().err


def test_expression_and_input_together_is_an_error(tmp_path, capsys):
    src = tmp_path / 'exprs.txt'
    src.write_text('1 + 2\n', encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main(['3 * 4', '--input', str(src)])
    assert exc.value.code == 2
    assert 'not both' in capsys.readouterr().err


def test_empty_expression_is_malformed(capsys):
    assert main(['', '--operators', '+']) == 1
    assert 'empty expression' in capsys.readouterr().err
