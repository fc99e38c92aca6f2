from typing import Any, Optional, List, Sequence
from argparse import ArgumentParser
import logging

from vec.config import DEFAULT_GROWTH_FACTOR
from vec.logging_config import setup_logging
from vec.containers import GrowthPolicy, Vector


# -----------------------------------------------------------------------------


class InjectedFailure(Exception):
    pass


class Countdown:
    """ Shared trigger making the k-th copy after arming fail.
    """

    def __init__(self) -> 'None':
        self.remaining: 'Optional[int]' = None
        self.copies = 0

    def arm(self, k: 'int') -> 'None':
        self.remaining = k

    def disarm(self) -> 'None':
        self.remaining = None

    def tick(self) -> 'None':
        self.copies += 1
        if self.remaining is None:
            return
        self.remaining -= 1
        if self.remaining == 0:
            self.remaining = None
            raise InjectedFailure(f"copy #{self.copies} failed")


class Fragile:
    """ Element whose copy fails once a shared countdown runs out.
    """

    def __init__(self, value: 'Any', countdown: 'Countdown') -> 'None':
        self.value, self.countdown = value, countdown

    def __copy__(self) -> 'Fragile':
        self.countdown.tick()
        return Fragile(self.value, self.countdown)

    def __eq__(self, other) -> 'bool':
        return isinstance(other, Fragile) and self.value == other.value

    def __repr__(self) -> 'str':
        return f'Fragile({self.value!r})'


# -----------------------------------------------------------------------------


def measure_growth(count: 'int', factor: 'float') -> 'List[int]':
    """ Appends `count` elements and returns the capacities passed through.
    """
    v: 'Vector[int]' = Vector(growth=GrowthPolicy(factor))
    capacities = [v.capacity()]
    for i in range(count):
        v.append(i)
        if v.capacity() != capacities[-1]:
            capacities.append(v.capacity())
    v.dispose()
    return capacities


def survives_failure(count: 'int', fail_at: 'int') -> 'bool':
    """ Fails the `fail_at`-th element copy during `reserve` and reports
        whether the vector is unchanged afterwards.
    """
    countdown = Countdown()
    v: 'Vector[Fragile]' = Vector.from_range(Fragile(i, countdown) for i in range(count))
    before = (v.size(), v.capacity(), [e.value for e in v])
    countdown.arm(fail_at)
    try:
        v.reserve(2 * v.capacity() + 1)
    except InjectedFailure:
        pass
    finally:
        countdown.disarm()
    after = (v.size(), v.capacity(), [e.value for e in v])
    v.dispose()
    return before == after


def main(argv: 'Optional[Sequence[str]]' = None) -> 'int':
    parser = ArgumentParser(description='Growth and failure-safety driver for vec.Vector.')
    parser.add_argument('--count', metavar='N', type=int, default=1000,
                        help='number of elements to append')
    parser.add_argument('--factor', metavar='F', type=float, default=DEFAULT_GROWTH_FACTOR,
                        help='growth factor (must be greater than 1)')
    parser.add_argument('--fail-at', metavar='K', type=int, default=None,
                        help='fail the K-th element copy during a reallocation')
    parser.add_argument('--verbose', action='store_true',
                        help='log reallocations and rollbacks')
    args = parser.parse_args(argv)
    if args.fail_at is not None and not 1 <= args.fail_at <= args.count:
        parser.error('--fail-at must lie between 1 and --count')
    if not args.factor > 1:
        parser.error('--factor must be greater than 1')

    if args.verbose:
        setup_logging(logging.DEBUG)

    capacities = measure_growth(args.count, args.factor)
    print(f"appended {args.count} elements with {len(capacities) - 1} reallocations, "
          f"final capacity {capacities[-1]}")

    if args.fail_at is not None:
        if survives_failure(args.count, args.fail_at):
            print(f"copy failure at element {args.fail_at}: vector unchanged")
        else:
            print(f"copy failure at element {args.fail_at}: vector CHANGED")
            return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
