from functools import reduce
import operator

import regex

from .util import wrap_user_errors


class Lexer:
    '''
    Lexer for a line of RPN input, bound to a Brain's operators.

    Recognises numbers, registered operator symbols (or their ASCII aliases),
    driver commands, and whitespace. Any other single character lexes as
    unknown, so that it can be fed to the brain and ignored there.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d{3}
                      (?:
                          _\d{3}
                      )+
                      (?:
                          _\d{1,2}
                      )?
                      |
                      \d+
                  )
                  '''
    # String formatting and regex is a tricky business, because of the braces.
    NUMBER = r'''
              (?:
                  # .2, 0.2, 0.200_200
                  {INTEGRAL}?
                  \.
                  {FRACTIONAL}
              )|(?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot)
                  {INTEGRAL}
                  \.?
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)

    # ASCII spellings of the built-in symbols. 'v' like in UNIX dc.
    ALIASES = {
        '*': '×',
        '/': '÷',
        '-': '−',
        'v': '√',
    }
    # Handled by the driver, not the brain.
    COMMANDS = {
        'c': 'clear',
        'f': 'printstack',
    }
    SPACE = r'\s+'
    UNKNOWN = r'\S'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, brain):
        '''
        Compile the grammar for the operators currently in brain.
        '''
        self.brain = brain
        self.aliases = {alias: symbol
                        for alias, symbol
                        in type(self).ALIASES.items()
                        if symbol in brain.operators
                        and alias not in brain.operators}
        operators = set(brain.operators) | set(self.aliases)
        commands = set(type(self).COMMANDS) - operators
        # Longest first, so multi-character symbols win over their prefixes.
        self.OPERATOR = self._alternation(operators)
        self.COMMAND = self._alternation(commands)
        self.LEXEME = r'(?<number>' + type(self).NUMBER + r')|' \
                      r'(?<operator>' + self.OPERATOR + r')|' \
                      r'(?<command>' + self.COMMAND + r')|' \
                      r'(?<space>' + type(self).SPACE + r')|' \
                      r'(?<unknown>' + type(self).UNKNOWN + r')'
        self.pattern = regex.compile(self.LEXEME, flags=type(self).FLAGS)

    @staticmethod
    def _alternation(words):
        if not words:
            # Never matches.
            return r'(?!)'
        return r'(?:' + r'|'.join(map(regex.escape,
                                      sorted(words,
                                             key=lambda w: (-len(w), w)))) \
            + r')'

    def lex(self, line):
        '''
        Take a line and yield all lexemes.
        '''
        position = 0
        while position < len(line):
            # Always matches something: SPACE and UNKNOWN cover every
            # character.
            match = self.pattern.match(line, position)
            yield match
            position = match.end()

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to the brain or driver.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the named groups the lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def symbol(self, groups):
        '''
        Brain symbol for an operator or unknown lexeme, resolving aliases.
        '''
        text = groups.get('operator') or groups.get('unknown')
        return self.aliases.get(text, text)

    def command(self, groups):
        '''
        Name of the driver command for a command lexeme.
        '''
        return type(self).COMMANDS[groups['command']]

    @wrap_user_errors('Cannot convert {1}')
    def number(self, text):
        '''
        Convert number lexeme to a float, dropping thousands separators.
        '''
        return float(text.replace('_', ''))
