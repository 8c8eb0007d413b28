'''
RPN command line tests
'''

import logging

from pytest import mark

from calcbrain import CLI


def run(*args):
    cli = CLI()
    cli.run(args=list(args))
    return cli


@mark.parametrize('expression, output', [
    ('5 3 +', '8.0\n'),
    ('10 4 -', '6.0\n'),
    ('10 4 −', '6.0\n'),
    ('8 2 /', '4.0\n'),
    ('9 v', '3.0\n'),
    ('3 4 + 2 *', '14.0\n'),
    ('1 0 ÷', 'inf\n'),
    ('4 +', ''),
    ('', ''),
])
def test_expression(capsys, expression, output):
    run('-e', expression)
    assert capsys.readouterr().out == output


def test_lines_share_brain(capsys):
    run('-e', '4 +', '5', '+')
    # 4 + 5 + has no result: the first + never got its operands.
    assert capsys.readouterr().out == '5.0\n'


def test_precision(capsys):
    run('-k', '2', '-e', '2 v')
    assert capsys.readouterr().out == '1.41\n'


def test_unknown_symbol(capsys, caplog):
    with caplog.at_level(logging.WARNING):
        run('-e', '5 %')
    assert capsys.readouterr().out == '5.0\n'
    assert "Unknown symbol '%' ignored" in caplog.text


def test_clear(capsys):
    run('-e', '5 c', '2 3 ×')
    assert capsys.readouterr().out == '6.0\n'


def test_printstack(capsys):
    run('-e', '5 3 f')
    assert capsys.readouterr().out == '5 3\n3.0\n'


def test_dump(capsys):
    run('-D', '-e', '5 + %')
    assert capsys.readouterr().out.splitlines() == [
        '[groups]\t<repr(lexeme)>\t<arity>',
        "number\t'5'\t0",
        "operator\t'+'\t2",
        "unknown\t'%'\tNone",
    ]
