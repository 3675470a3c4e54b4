from calculator.parser import ParserError, parse
from calculator.runtime import evaluate, format_number
from calculator.tokenizer import TokenizerError, tokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "-2 * 3",
    "1 - 2 - 3",
    "7/6/2000",
    "1 / 0",
    "1 2",
    "1..2",
    "1 + a",
    "(1 + 14 * (54 - 2)",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    try:
        expression = parse(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"ast: {expression}")
    print(f"result: {format_number(evaluate(expression))}")
