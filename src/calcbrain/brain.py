from collections import namedtuple
from types import MappingProxyType
import logging
import math
import operator

from .util import CalcError


log = logging.getLogger(__name__)


class Operand(namedtuple('Operand', 'value')):
    '''
    A literal number on the stack.
    '''
    __slots__ = ()
    ARITY = 0

    def __str__(self):
        return '{:g}'.format(self.value)


class UnaryOperation(namedtuple('UnaryOperation', 'symbol function')):
    '''
    Named one-argument function on the stack.
    '''
    __slots__ = ()
    ARITY = 1

    def __str__(self):
        return self.symbol


class BinaryOperation(namedtuple('BinaryOperation', 'symbol function')):
    '''
    Named two-argument function on the stack.

    The function is called as function(closer, farther): the operand pushed
    last comes first.
    '''
    __slots__ = ()
    ARITY = 2

    def __str__(self):
        return self.symbol


OPERATIONS = {
    UnaryOperation.ARITY: UnaryOperation,
    BinaryOperation.ARITY: BinaryOperation,
}


def _divide(divisor, dividend):
    '''
    IEEE 754 division, dividend over divisor, never raising.
    '''
    try:
        return dividend / divisor
    except ZeroDivisionError:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1, divisor)


def _sqrt(x):
    '''
    Square root; NaN rather than ValueError below zero.
    '''
    if x < 0:
        return math.nan
    return math.sqrt(x)


# symbol: (arity, function)
BUILTINS = {
    '×': (2, operator.__mul__),
    '÷': (2, _divide),
    '+': (2, operator.__add__),
    # Closer operand comes first, so 10 4 − is 10 - 4.
    '−': (2, lambda closer, farther: farther - closer),
    '√': (1, _sqrt),
}


class _Frame:
    '''
    Operation waiting on the reduction of the entries below it.
    '''
    __slots__ = 'operation', 'end', 'operands'

    def __init__(self, operation, end):
        self.operation = operation
        # Where the operation's own sub-sequence ends, for giving it back
        # untouched on failure.
        self.end = end
        self.operands = []


def _reduce(entries, end):
    '''
    Reduce entries[:end], returning the result and the end of what's left.

    Walks down from the top of the stack with an explicit frame stack
    instead of recursing, so stack depth is not limited by the interpreter.
    '''
    frames = []
    descend = True
    result, remaining = None, end
    while True:
        if descend:
            if end == 0:
                result, remaining = None, 0
            else:
                entry = entries[end - 1]
                if isinstance(entry, Operand):
                    result, remaining = entry.value, end - 1
                else:
                    frames.append(_Frame(entry, end))
                    end -= 1
                    continue
            descend = False

        if not frames:
            return result, remaining

        frame = frames[-1]
        if result is None:
            # Not enough operands: this level reports nothing, and hands back
            # its whole input rather than what it partially consumed.
            frames.pop()
            result, remaining = None, frame.end
            continue

        frame.operands.append(result)
        if len(frame.operands) < frame.operation.ARITY:
            end = remaining
            descend = True
            continue

        frames.pop()
        result = frame.operation.function(*frame.operands)


def reduce(entries):
    '''
    Reduce a sequence of entries, top of the stack last.

    :returns: (result, remaining), result being None if the entries don't
              reduce, and remaining the unconsumed entries, bottom first.
    '''
    entries = tuple(entries)
    result, remaining = _reduce(entries, len(entries))
    return result, entries[:remaining]


class Brain:
    '''
    RPN evaluator.

    Holds a stack of operands and operations, and evaluates it whenever
    anything is pushed. Never raises while evaluating: anything that can't be
    computed is a None result.
    '''

    def __init__(self, operators=None):
        '''
        Create brain with the built-in operators and an empty stack.

        :param operators: Extra (symbol, arity, function) triples to register.
        '''
        self._operators = dict()
        self._stack = []
        for symbol, (arity, function) in BUILTINS.items():
            self.register(symbol, arity, function)
        for symbol, arity, function in operators or ():
            self.register(symbol, arity, function)

    @property
    def operators(self):
        '''
        Read-only view of the registered operations, by symbol.
        '''
        return MappingProxyType(self._operators)

    @property
    def entries(self):
        return tuple(self._stack)

    def register(self, symbol, arity, function):
        '''
        Register an operation.

        Only possible while the stack is empty, i.e. before first use or
        after a clear.
        '''
        if self._stack:
            raise CalcError('Cannot register {} on a brain in use'
                            .format(repr(symbol)))
        if not symbol or not isinstance(symbol, str):
            raise CalcError('Invalid symbol {}'.format(repr(symbol)))
        if symbol in self._operators:
            raise CalcError('{} already registered'.format(repr(symbol)))
        if arity not in OPERATIONS:
            raise CalcError('Unsupported arity {} for {}'
                            .format(arity, repr(symbol)))
        self._operators[symbol] = OPERATIONS[arity](symbol, function)

    def push_operand(self, value):
        '''
        Push number onto stack, returning the evaluation of the stack.
        '''
        self._stack.append(Operand(float(value)))
        log.debug('pushed operand %r', self._stack[-1].value)
        return self.evaluate()

    def push_operator(self, symbol):
        '''
        Push registered operation onto stack, returning the evaluation.

        Unknown symbols are ignored, but the stack is evaluated anyway.
        '''
        operation = self._operators.get(symbol)
        if operation is None:
            log.debug('ignoring unknown symbol %r', symbol)
        else:
            self._stack.append(operation)
            log.debug('pushed operation %s', symbol)
        return self.evaluate()

    def evaluate(self):
        '''
        Evaluate the whole stack, without modifying it.
        '''
        result, remaining = reduce(self._stack)
        log.debug('%s = %r with %d left over', self, result, len(remaining))
        return result

    def clear(self):
        '''
        Clear everything from the stack.
        '''
        self._stack.clear()

    def __len__(self):
        return len(self._stack)

    def __str__(self):
        return ' '.join(map(str, self._stack))
