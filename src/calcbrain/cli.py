from os import isatty, path
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError
from .brain import Brain, Operand
from .lexer import Lexer


log = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        history = None
        if self.history:
            history = FileHistory(path.expanduser(self.history))
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the RPN brain.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.calcbrain_history'
    DEFAULT_PRECISION = None

    def dumper(self):
        '''
        Dump all lexeme matches and their arity.
        '''
        brain = Brain()
        lexer = Lexer(brain)
        print('[groups]\t<repr(lexeme)>\t<arity>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                groups = lexer.matchedgroups(match)
                print(*groups.keys(),
                      repr(match.group(0)),
                      self._arity(lexer, groups),
                      sep='\t')

    def _arity(self, lexer, groups):
        '''
        Number of operands a lexeme consumes, None if not fed to the brain.
        '''
        if 'number' in groups:
            return Operand.ARITY
        operation = lexer.brain.operators.get(lexer.symbol(groups))
        if operation is None:
            return None
        return operation.ARITY

    def executor(self):
        '''
        Run brain, printing the result after every line.
        '''
        brain = Brain()
        lexer = Lexer(brain)
        for line in self.args.expressions:
            result = None
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        result = self.feed(brain, lexer,
                                           lexer.matchedgroups(match),
                                           result)
            # Abort entire rest of line
            except CalcError as e:
                log.error('%s', e.args[0], exc_info=self.args.verbose)
                continue
            if result is not None:
                self.print(result)

    def feed(self, brain, lexer, groups, result):
        '''
        Feed one lexeme to brain, returning the latest result.
        '''
        if 'number' in groups:
            return brain.push_operand(lexer.number(groups['number']))
        elif 'command' in groups:
            command = lexer.command(groups)
            if command == 'clear':
                brain.clear()
                return None
            elif command == 'printstack':
                print(brain)
            return result
        symbol = lexer.symbol(groups)
        if 'unknown' in groups:
            log.warning('Unknown symbol %s ignored', repr(symbol))
        return brain.push_operator(symbol)

    def _round(self, n):
        '''
        Round number to precision if set to round.
        '''
        if self.args.precision is None:
            return n
        return round(n, self.args.precision)

    def print(self, result):
        print(self._round(result), flush=True)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=self.args.history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=self.DEFAULT_PRECISION,
                                          help='round results to this '
                                               'many decimal places')
        self.argument_parser.add_argument('--history',
                                          nargs=OPTIONAL,
                                          const=self.HISTORY_FILE,
                                          help='keep interactive history '
                                               'in this file')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(format='%(levelname)s: %(message)s',
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
