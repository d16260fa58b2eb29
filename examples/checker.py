"""Checker for the example problem: the first output line must equal the answer line."""

from kuroe import Verdict, checker_program, quit_with


@checker_program
def main(inf, ouf, ans, params):
    output = ouf.read_line()
    answer = ans.read_line()

    if output == answer:
        quit_with(Verdict.OK, "ok")
    else:
        quit_with(Verdict.WRONG_ANSWER, "wa")


if __name__ == "__main__":
    main()
