"""Custom delimiters -- configure markers and globals on an Environment.

Useful when the output itself contains ``<%`` (for example, when generating
other templates).

Run:
    python app.py
"""

from microtpl import Environment, LexerConfig

env = Environment(
    lexer_config=LexerConfig(open_marker="{{%", close_marker="%}}"),
    globals={"product": "microtpl"},
)

template = env.from_string("{{%= product %}} renders <%= name %> as plain text")
output = template.render()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
