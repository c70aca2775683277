import logging

from lispy import config
from lispy.builtins import register
from lispy.evaluation.evaluator import evaluate
from lispy.reader.grammar import parse
from lispy.reader.reader import read
from lispy.types import Environment, Error, Value, render

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Evaluates Lispy source against one root environment.
    Each interpreter owns its own environment, so several can coexist.
    """
    def __init__(self, prelude: str | None = "auto"):
        self.env = Environment()
        register(self.env)

        if prelude == "auto":
            path = config.get_prelude_path()
            prelude = path.read_text() if path is not None else None
        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str):
        """Evaluate a string of Lispy code as prelude."""
        for result in self.run(code):
            if isinstance(result, Error):
                logger.warning("prelude: %s", result)

    def eval(self, code: str) -> Value:
        """Evaluate a whole line as a single S-expression, like the prompt does.

        `+ 1 2` and `(+ 1 2)` both give 3.
        """
        return evaluate(self.env, read(parse(code)))

    def run(self, code: str) -> list[Value]:
        """Evaluate each top-level expression of `code` in order."""
        exprs = read(parse(code))
        results = []
        while len(exprs):
            results.append(evaluate(self.env, exprs.pop(0)))
        return results

    @staticmethod
    def render(value: Value) -> str:
        return render(value)


#  Example use-age:
if __name__ == "__main__":
    logging.basicConfig(level=config.get_log_level())
    prelude = """
        (def {fun} (\\ {args body} {def (head args) (\\ (tail args) body)}))
        (fun {unpack f xs} {eval (join (list f) xs)})
        (fun {pack f & xs} {f xs})
        (def {curry} unpack)
        (def {uncurry} pack)
    """
    interp = Interpreter(prelude=prelude)

    # Test expressions
    tests = [
        "+ 1 (* 7 5) 3                      ;; -> 39",
        "(/ 7 -2)                           ;; -> -3",
        "head {1 2 3}                       ;; -> {1}",
        "eval (tail {tail tail {5 6 7}})    ;; -> {6 7}",
        "(\\ {x y} {+ x y}) 10 20           ;; -> 30",
        "curry + {5 6 7}                    ;; -> 18",
        "uncurry head 5 6 7                 ;; -> {5}",
    ]

    for code in tests:
        source = code.split(";;")[0]
        result = interp.eval(source)
        print(source.strip(), "=>", interp.render(result))
