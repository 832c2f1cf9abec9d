"""Swift localization enum extractor."""

import re
from typing import FrozenSet, List, Optional, Tuple

from ..core.errors import ParseError
from .base import BaseKeyExtractor, ExtractOptions

# (kind, text, line) where kind is 'stmt', 'open' or 'close'
Token = Tuple[str, str, int]


class SwiftEnumExtractor(BaseKeyExtractor):
    """
    Extracts term keys from a Swift ``enum`` of localization cases.

    Supported declarations inside the scoped enum:
        case title
        case saveButton = "button.save"
        case a, b = "bee", c
        enum Settings { case header }      -> "Settings.header"

    Case labels inside ``switch`` statements, functions and computed
    properties are ignored. Raw string values win over case names.
    """

    ENUM_DECL_PATTERN = re.compile(r'(?:^|[\s)])enum\s+`?([A-Za-z_][A-Za-z0-9_]*)`?')
    CASE_DECL_PATTERN = re.compile(r'^(?:indirect\s+)?case\b(.*)$', re.DOTALL)
    CASE_ITEM_PATTERN = re.compile(
        r'^`?([A-Za-z_][A-Za-z0-9_]*)`?'
        r'(?:\s*=\s*"((?:[^"\\]|\\.)*)")?$',
        re.DOTALL
    )
    ATTRIBUTE_PATTERN = re.compile(r'^(?:@[A-Za-z_]\w*(?:\([^)]*\))?\s*)+')
    IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

    SIMPLE_ESCAPES = {
        '0': '\0',
        '\\': '\\',
        't': '\t',
        'n': '\n',
        'r': '\r',
        '"': '"',
        "'": "'",
    }

    def get_file_extensions(self) -> List[str]:
        """Return Swift file extensions."""
        return ['.swift']

    def extract(self, content: str, options: ExtractOptions) -> FrozenSet[str]:
        """
        Collect the keys declared under ``options.enum_name``.

        Raises:
            ParseError: Enum not declared, unbalanced braces, unterminated
                literal or comment, or a malformed case declaration
        """
        if not self.IDENTIFIER_PATTERN.match(options.enum_name or ''):
            raise ParseError(f"Invalid enum name: '{options.enum_name}'")

        keys: List[str] = []
        stack: List[Tuple[Optional[str], int]] = []  # (enum name or None, opening line)
        scope_depth: Optional[int] = None
        found = False

        for kind, text, line in self._tokenize(content):
            if kind == 'open':
                match = self.ENUM_DECL_PATTERN.search(text)
                name = match.group(1) if match else None
                stack.append((name, line))
                if scope_depth is None and name == options.enum_name:
                    scope_depth = len(stack) - 1
                    found = True

            elif kind == 'close':
                if not stack:
                    raise ParseError("Unbalanced '}'", line=line)
                stack.pop()
                if scope_depth is not None and len(stack) <= scope_depth:
                    scope_depth = None

            elif scope_depth is not None:
                enclosing = [name for name, _ in stack[scope_depth:]]
                # Only enum bodies declare cases; switch labels live in other blocks
                if any(name is None for name in enclosing):
                    continue
                prefix = '.'.join(enclosing[1:])
                keys.extend(self._parse_case_declaration(text, line, prefix))

        if stack:
            raise ParseError("Unbalanced '{' (block is never closed)", line=stack[-1][1])

        if not found:
            raise ParseError(f"Enum '{options.enum_name}' is not declared")

        return self.normalize_keys(keys, options)

    def _parse_case_declaration(self, text: str, line: int, prefix: str) -> List[str]:
        """Return the keys of a ``case`` statement, or [] for any other statement."""
        statement = self.ATTRIBUTE_PATTERN.sub('', text).strip()
        match = self.CASE_DECL_PATTERN.match(statement)
        if not match:
            return []

        items = self._split_items(match.group(1))
        if not items:
            raise ParseError("Malformed case declaration: no case name", line=line)

        keys = []
        for item in items:
            item_match = self.CASE_ITEM_PATTERN.match(item)
            if not item_match:
                raise ParseError(f"Malformed case declaration: '{item}'", line=line)

            case_name, raw_value = item_match.groups()
            if raw_value is not None:
                keys.append(self._unescape(raw_value, line))
            elif prefix:
                keys.append(f"{prefix}.{case_name}")
            else:
                keys.append(case_name)

        return keys

    @staticmethod
    def _split_items(text: str) -> List[str]:
        """Split ``a, b = "x,y"`` on commas outside string literals."""
        if not text.strip():
            return []

        items = []
        current = []
        in_string = False
        escaped = False

        for ch in text:
            if in_string:
                current.append(ch)
                if escaped:
                    escaped = False
                elif ch == '\\':
                    escaped = True
                elif ch == '"':
                    in_string = False
            elif ch == '"':
                in_string = True
                current.append(ch)
            elif ch == ',':
                items.append(''.join(current).strip())
                current = []
            else:
                current.append(ch)

        items.append(''.join(current).strip())
        return items

    def _unescape(self, value: str, line: int) -> str:
        """Resolve Swift string escapes in a raw value."""
        if '\\' not in value:
            return value

        result = []
        i = 0
        while i < len(value):
            ch = value[i]
            if ch != '\\':
                result.append(ch)
                i += 1
                continue

            nxt = value[i + 1] if i + 1 < len(value) else ''
            if nxt in self.SIMPLE_ESCAPES:
                result.append(self.SIMPLE_ESCAPES[nxt])
                i += 2
            elif nxt == 'u' and value[i + 2:i + 3] == '{':
                end = value.find('}', i + 3)
                digits = value[i + 3:end] if end != -1 else ''
                if not re.match(r'^[0-9A-Fa-f]{1,8}$', digits) or int(digits, 16) > 0x10FFFF:
                    raise ParseError(f"Invalid unicode escape in '{value}'", line=line)
                result.append(chr(int(digits, 16)))
                i = end + 1
            else:
                raise ParseError(f"Invalid escape sequence in '{value}'", line=line)

        return ''.join(result)

    def _tokenize(self, content: str) -> List[Token]:
        """
        Split Swift source into statements and brace tokens.

        Comments are dropped, string literals are kept verbatim, and a
        statement ends at a newline, ``;``, ``{`` or ``}``. A trailing comma
        continues the statement on the next line.
        """
        tokens: List[Token] = []
        buf: List[str] = []
        start_line: Optional[int] = None
        line = 1
        i = 0
        n = len(content)

        def flush(kind: str = 'stmt', at_line: Optional[int] = None):
            nonlocal buf, start_line
            text = ''.join(buf).strip()
            if kind == 'stmt':
                if text:
                    tokens.append(('stmt', text, start_line or line))
            else:
                tokens.append((kind, text, at_line or line))
            buf = []
            start_line = None

        while i < n:
            ch = content[i]

            if content.startswith('//', i):
                end = content.find('\n', i)
                i = n if end == -1 else end
                continue

            if content.startswith('/*', i):
                comment_line = line
                depth = 1
                i += 2
                while i < n and depth:
                    if content.startswith('/*', i):
                        depth += 1
                        i += 2
                    elif content.startswith('*/', i):
                        depth -= 1
                        i += 2
                    else:
                        if content[i] == '\n':
                            line += 1
                        i += 1
                if depth:
                    raise ParseError("Unterminated block comment", line=comment_line)
                buf.append(' ')
                continue

            if ch == '"':
                if start_line is None:
                    start_line = line
                literal, i, line = self._read_string(content, i, line)
                buf.append(literal)
                continue

            if ch == '\n':
                if ''.join(buf).rstrip().endswith(','):
                    buf.append(' ')
                else:
                    flush()
                line += 1
            elif ch == ';':
                flush()
            elif ch == '{':
                flush('open', line)
            elif ch == '}':
                flush()
                tokens.append(('close', '', line))
            else:
                if start_line is None and not ch.isspace():
                    start_line = line
                buf.append(ch)
            i += 1

        flush()
        return tokens

    @staticmethod
    def _read_string(content: str, i: int, line: int) -> Tuple[str, int, int]:
        """Read a string literal starting at ``i``; return (literal, next index, line)."""
        start_line = line

        if content.startswith('"""', i):
            end = content.find('"""', i + 3)
            if end == -1:
                raise ParseError("Unterminated multi-line string literal", line=start_line)
            literal = content[i:end + 3]
            return literal, end + 3, line + literal.count('\n')

        j = i + 1
        while j < len(content):
            ch = content[j]
            if ch == '\\':
                j += 2
                continue
            if ch == '"':
                return content[i:j + 1], j + 1, line
            if ch == '\n':
                break
            j += 1

        raise ParseError("Unterminated string literal", line=start_line)
