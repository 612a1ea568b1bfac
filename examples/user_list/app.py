"""User list -- loops and conditionals with control-flow directives.

A statement ending in ``:`` opens a block; ``<% end %>`` closes it.

Run:
    python app.py
"""

from microtpl import compile

TEMPLATE = """\
<ul>
<% for user in users: %>
  <li><%= user["name"] %><% if user.get("admin"): %> (admin)<% end %></li>
<% end %>
</ul>
"""

template = compile(TEMPLATE, name="users.html")

users = [
    {"name": "5342", "admin": True},
    {"name": "325"},
]
output = template({"users": users})


def main() -> None:
    print(output)
    print("Generated code:")
    print(template.code)


if __name__ == "__main__":
    main()
