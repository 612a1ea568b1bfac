"""Hello World -- the simplest microtpl example.

Compile a template from a string and render it with context variables.

Run:
    python app.py
"""

from microtpl import compile

# Compile from string
template = compile("Hello, <%= name %>!")

# Render with context
output = template({"name": "World"})


def main() -> None:
    print(output)
    print()

    # Multiple renders with different context
    for name in ["microtpl", "Python", "Templates"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()
