"""Validator for the example problem: the single input line starts with "example"."""

from kuroe import ensure, validation_program


@validation_program
def main(inf, params):
    s = inf.read_line()
    ensure(s.startswith("example"), 'testcase must start with "example"')

    inf.read_eof()


if __name__ == "__main__":
    main()
