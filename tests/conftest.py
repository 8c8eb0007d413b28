from pytest import Item, fixture

from calcbrain import Brain, Lexer


@fixture
def brain():
    return Brain()


@fixture
def lexer(brain):
    return Lexer(brain)


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Only called with enable_assertion_pass_hook set. Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          # Drop the full-diff hint lines.
          '\n'.join(str(expl).splitlines()[:-2]))
