'''
RPN lexer tests
'''

import regex

from pytest import raises

from calcbrain import Brain, CalcError, Lexer


def feedable(lexer, line):
    return [lexer.matchedgroups(m)
            for m in lexer.lex(line)
            if lexer.isfeedable(m)]


def test_numbers(lexer):
    groups = feedable(lexer, '1 12.5 1_200 1_200. .25 0.200_200')
    assert [g['number'] for g in groups] == \
        ['1', '12.5', '1_200', '1_200.', '.25', '0.200_200']
    assert [lexer.number(g['number']) for g in groups] == \
        [1.0, 12.5, 1200.0, 1200.0, 0.25, 0.2002]


def test_no_space_needed(lexer):
    groups = feedable(lexer, '9√')
    assert groups == [{'number': '9'}, {'operator': '√'}]


def test_aliases(lexer):
    groups = feedable(lexer, '* / - v × ÷ + − √')
    assert [lexer.symbol(g) for g in groups] == \
        ['×', '÷', '−', '√', '×', '÷', '+', '−', '√']


def test_unknown(lexer):
    groups = feedable(lexer, '5 % x')
    assert groups[1] == {'unknown': '%'}
    assert lexer.symbol(groups[2]) == 'x'


def test_commands(lexer):
    groups = feedable(lexer, 'c f')
    assert [lexer.command(g) for g in groups] == ['clear', 'printstack']


def test_spaces_not_feedable(lexer):
    matches = list(lexer.lex('  1 \t'))
    assert [lexer.isfeedable(m) for m in matches] == [False, True, False]
    assert ''.join(m.group(0) for m in matches) == '  1 \t'


def test_registered_symbols():
    brain = Brain(operators=[('mod', 2, lambda closer, farther:
                              farther % closer),
                             ('c', 1, lambda x: x ** 3)])
    lexer = Lexer(brain)
    groups = feedable(lexer, '7 4 mod m c')
    assert groups[2] == {'operator': 'mod'}
    assert groups[3] == {'unknown': 'm'}
    # Registered symbols shadow commands.
    assert groups[4] == {'operator': 'c'}


def test_alias_needs_symbol():
    brain = Brain()
    lexer = Lexer(brain)
    assert 'v' in lexer.aliases
    brain = Brain(operators=[('v', 1, lambda x: x)])
    lexer = Lexer(brain)
    assert 'v' not in lexer.aliases
    assert lexer.symbol(feedable(lexer, 'v')[0]) == 'v'


def test_bad_number(lexer):
    with raises(CalcError, match=regex.escape('Cannot convert 1.2.3')):
        lexer.number('1.2.3')
