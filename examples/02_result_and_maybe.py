#!/usr/bin/env python
"""
Example 02: The same generator style over Result and Maybe

Run:
    uv run python examples/02_result_and_maybe.py
"""

from gencont import Driver, Err, MaybeInterpreter, Ok, ResultInterpreter, lookup

result = Driver(ResultInterpreter())
maybe = Driver(MaybeInterpreter())


def parse_int(text):
    try:
        return Ok(int(text))
    except ValueError as exc:
        return Err(exc)


@result.do
def add(a, b):
    x = yield parse_int(a)
    y = yield parse_int(b)
    return x + y


@maybe.do
def street_of(user):
    address = yield lookup(user, "address")
    return (yield lookup(address, "street"))


if __name__ == "__main__":
    print(add("1", "2"))
    print(add("1", "two"))
    print(street_of({"address": {"street": "Main St"}}))
    print(street_of({}))
