"""Markdown documents shared by the test modules."""

STYLE_GUIDE = """\
# HTML Style

Some prose about markup.

- narrative item one
- narrative item two

## Indentation

Indent nested elements consistently.

<!--  -->

- How many spaces should nested HTML elements be indented?
- Four spaces
  Four spaces makes deeply nested markup drift off the screen.
- Two spaces
  Correct. Two spaces keeps nesting readable.
- A tab
  Tabs render at different widths in different editors.
{: .choose_best #html_indentation title="HTML Indentation" points="1" answer="2" }

```html
- fenced item
# not a heading
<!--  -->
```

## Wrap-up

<!--  -->

-
  How many minutes did this section take you?
{: .free_text_number #time_taken_html title="Time Taken" points="0" answer="any" }
"""

MISSING_METADATA = """\
## Quiz

<!--  -->

- Which closing tag style is preferred?
- Explicit closing tags
  Right.
- Omitted closing tags
  Avoid this.

## Next Section

- an ordinary list after the heading
"""


def choose_best(block_id: str, answer: str, options: int = 3, points: str = "1") -> str:
    """Build a choose_best block with the given number of options."""
    lines = ["<!--  -->", "", f"- Prompt for {block_id}"]
    for i in range(1, options + 1):
        lines.append(f"- Option {i}")
        lines.append(f"  Feedback {i}")
    lines.append(
        f'{{: .choose_best #{block_id} title="Title {block_id}" points="{points}" answer="{answer}" }}'
    )
    return "\n".join(lines) + "\n"
