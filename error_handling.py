"""
Error types and parse error reporting for Calc
Parse errors carry source context and suggestions; runtime errors
are only raised by the opt-in strict and checked-overflow modes
"""

from typing import List, Optional, Dict
from pyparsing import ParseException
import re


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_parse_error(
    message: str,
    line: int,
    column: int,
    filename: str = "<input>",
    expected: Optional[List[str]] = None,
    got: Optional[str] = None,
    context: Optional[str] = None,
    suggestions: Optional[List[str]] = None
) -> Dict:
    """Create an immutable parse error structure"""
    return {
        'message': message,
        'filename': filename,
        'line': line,
        'column': column,
        'expected': expected or [],
        'got': got,
        'context': context,
        'suggestions': suggestions or []
    }


def format_parse_error(error: Dict) -> str:
    """Format parse error as string"""
    error_msg = f"Parse error at line {error['line']}, column {error['column']}"
    if error['filename'] != "<input>":
        error_msg += f" of {error['filename']}"
    error_msg += ":\n"
    error_msg += f"  {error['message']}\n"

    if error['expected']:
        error_msg += f"  Expected: {', '.join(error['expected'])}\n"

    if error['got']:
        error_msg += f"  Got: {error['got']}\n"

    if error['context']:
        error_msg += f"  Context:\n{error['context']}\n"

    if error['suggestions']:
        error_msg += "  Suggestions:\n"
        for suggestion in error['suggestions']:
            error_msg += f"    - {suggestion}\n"

    return error_msg.rstrip('\n')


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 1,
                      line_offset: int = 0) -> str:
    """Get context lines around the error; line_offset shifts the printed numbers"""
    lines = source_text.splitlines()
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i + 1 + line_offset:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:  # Error line
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)


def extract_expected(exc: ParseException) -> List[str]:
    """Extract expected tokens from exception"""
    # pyparsing only reports expectations through the message text
    match = re.search(r"Expected\s+(.+?)(?:,\s+found|\s+\(at|$)", str(exc))
    if match:
        return [match.group(1)]
    return ["valid syntax"]


def extract_got(line_text: str, col_num: int) -> str:
    """Extract what was actually found at the error column"""
    if col_num <= len(line_text):
        start = max(0, col_num - 1)
        got_text = line_text[start:start + 10].strip()
        if got_text:
            return f"'{got_text}'"
    return "end of line"


def generate_suggestions(line_text: str, got: str) -> List[str]:
    """Generate helpful suggestions based on the error"""
    suggestions = []

    if re.search(r"\d\.\d", line_text):
        suggestions.append("Calc only supports integers - remove the decimal point")

    if line_text.count('(') != line_text.count(')'):
        suggestions.append("Check that every '(' has a matching ')'")

    if line_text.count('=') > 1:
        suggestions.append("Only one assignment is allowed per line")

    if re.match(r"\s*\d\w*\s*=", line_text):
        suggestions.append("Variable names must start with a letter or underscore")

    if re.search(r"[+\-*/]\s*$", line_text):
        suggestions.append("An operator needs an operand on its right")

    if got.strip("'") and got.strip("'")[0] in "%^!<>&|":
        suggestions.append("Supported operators are + - * /")

    return suggestions


def enhance_parse_exception_dict(exc: ParseException, source_text: str,
                                 line_num: int, filename: str = "<input>") -> Dict:
    """
    Convert a pyparsing exception raised on a single line into an
    enhanced error dict positioned within the whole program text
    """
    lines = source_text.splitlines()
    line_text = lines[line_num - 1] if 0 < line_num <= len(lines) else ""
    col_num = exc.column

    got = extract_got(line_text, col_num)

    return make_parse_error(
        message=exc.msg,
        line=line_num,
        column=col_num,
        filename=filename,
        expected=extract_expected(exc),
        got=got,
        context=get_context_lines(source_text, line_num, col_num),
        suggestions=generate_suggestions(line_text, got)
    )


# ============================================================================
# EXCEPTIONS
# ============================================================================

class CalcError(Exception):
    """Base class for all Calc errors"""
    pass


class CalcParseError(CalcError):
    """Syntax error with source position and context"""
    def __init__(self, message: str, line: int = 0, column: int = 0,
                 filename: str = "<input>", expected: Optional[List[str]] = None,
                 got: Optional[str] = None, context: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        self.expected = expected or []
        self.got = got
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(message)

    @classmethod
    def from_dict(cls, error: Dict) -> "CalcParseError":
        return cls(**error)

    def to_dict(self) -> Dict:
        return make_parse_error(
            self.message, self.line, self.column, self.filename,
            self.expected, self.got, self.context, self.suggestions
        )

    def __str__(self) -> str:
        return format_parse_error(self.to_dict())


class CalcRuntimeError(CalcError):
    """Fatal evaluation error (strict mode or checked overflow only)"""
    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


def create_enhanced_parser_with_errors(parser_func, source_text: str, line_num: int,
                                       filename: str = "<input>"):
    """Wrap a single-line parse function so pyparsing errors become CalcParseError"""
    def enhanced_parse(*args, **kwargs):
        try:
            return parser_func(*args, **kwargs)
        except ParseException as e:
            error_dict = enhance_parse_exception_dict(e, source_text, line_num, filename)
            raise CalcParseError.from_dict(error_dict) from e

    return enhanced_parse
