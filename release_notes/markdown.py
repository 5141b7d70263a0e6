import dataclasses
import re


_mention_pattern = re.compile(r'(@\w+)')
_markdown_special_chars_pattern = re.compile(r'([*_(){}#!.<>\[\]])')


def escape_markdown(text: str) -> str:
    '''
    escapes the given text for being rendered as (GitHub-flavoured) markdown:

    - mentions (`@user`) are surrounded by backticks (to not notify mentioned users)
    - markdown control characters are prefixed w/ a backslash
    '''
    text = _mention_pattern.sub(r'`\1`', text)
    return _markdown_special_chars_pattern.sub(r'\\\1', text)


@dataclasses.dataclass
class Heading:
    title: str

    def __str__(self):
        return f'**{self.title}**'


@dataclasses.dataclass
class ListItem:
    text: str
    reference: str | None = None

    def __str__(self):
        if self.reference:
            return f'* {self.text} ({self.reference})'
        return f'* {self.text}'


def section(
    heading: Heading,
    items: list[ListItem],
) -> str:
    '''
    renders a section (heading followed by list-items), terminated by an empty line
    '''
    lines = [str(heading)]
    lines.extend(str(item) for item in items)
    return '\n'.join(lines) + '\n\n'
