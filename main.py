"""
Calc - Main Entry Point
Line-oriented integer calculator: runs a file, standard input, or an interactive session
"""

import sys
import argparse
from typing import Optional, List
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from arithmetic import OVERFLOW_POLICIES, OVERFLOW_WRAP
from error_handling import CalcParseError, CalcRuntimeError
from interpreter import create_interpreter, create_debug_interpreter, Interpreter
from parsing import create_parser, create_debug_parser, pretty_print_ast


VERSION = "Calc v1.0.0"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='calc',
      description='Calc - line-oriented integer calculator',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s program.calc              # Run a program file
  %(prog)s < program.calc            # Run a program from standard input
  %(prog)s -i                        # Interactive mode
  %(prog)s --ast program.calc        # Parse and show the AST
  %(prog)s --overflow checked f.calc # Stop on 32-bit overflow
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Calc program file (reads standard input when omitted)'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--ast',
      action='store_true',
      help='Parse the program and show its AST instead of running it'
  )

  parser.add_argument(
      '--overflow',
      choices=OVERFLOW_POLICIES,
      default=OVERFLOW_WRAP,
      help='Integer overflow policy (default: %(default)s)'
  )

  parser.add_argument(
      '--strict',
      action='store_true',
      help='Treat reading an unassigned variable as an error'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Trace parsing and evaluation on standard error'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def error(message: str) -> None:
  print(message, file=sys.stderr)


def make_interpreter(args: argparse.Namespace) -> Interpreter:
  """Create the interpreter selected by the command line flags"""
  if args.debug:
    return create_debug_interpreter(overflow=args.overflow, strict=args.strict)
  return create_interpreter(overflow=args.overflow, strict=args.strict)


def run_source(text: str, args: argparse.Namespace, filename: str = "<stdin>") -> int:
  """Parse and run a whole program; returns the process exit status"""
  parser = create_debug_parser() if args.debug else create_parser()

  try:
    program = parser.parse_string(text, filename)
  except CalcParseError as e:
    error(str(e))
    return 1

  if args.ast:
    print(pretty_print_ast(program), end='')
    return 0

  interpreter = make_interpreter(args)
  if args.debug:
    error(f"Parsed {len(program)} statements")

  try:
    interpreter.interpret_program(program)
  except CalcRuntimeError as e:
    error(f"Runtime error: {e}")
    return 1
  return 0


def run_script_file(script_path: str, args: argparse.Namespace) -> int:
  """Run a Calc program file"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      text = f.read()
  except FileNotFoundError:
    error(f"Error: Script file '{script_path}' not found")
    return 1
  except PermissionError:
    error(f"Error: Permission denied reading '{script_path}'")
    return 1
  except IsADirectoryError:
    error(f"Error: '{script_path}' is a directory, not a Calc program")
    return 1
  except UnicodeDecodeError as e:
    error(f"Error: Cannot decode file '{script_path}': {e}")
    error("  Hint: Make sure the file is a text file with UTF-8 encoding")
    return 1

  return run_source(text, args, script_path)


def setup_readline() -> None:
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.calc_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First run, or no permission

  readline.set_history_length(1000)

  completions = [":env", ":ast ", ":help", "exit"]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def show_help() -> None:
  print("REPL Commands:")
  print("  :ast <line>       - Show the AST of a line without running it")
  print("  :env              - Show current variables")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language:")
  print("  x = 5             - Assignment")
  print("  (x + 1) * 2       - Print the value of an expression")
  print("  Operators: + - * / (integer division truncates toward zero)")


def handle_repl_line(line: str, line_num: int, parser, interpreter: Interpreter) -> bool:
  """Process one interactive line; returns False when the session should end"""
  code = line.strip()

  if code == "exit":
    return False

  if code == ":ast" or code.startswith(":ast "):
    try:
      print(pretty_print_ast(parser.parse_statement(code[4:].strip(), line_num)), end='')
    except CalcParseError as e:
      error(str(e))
    return True

  if code == ":env":
    bindings = interpreter.store.snapshot()
    if bindings:
      for name, value in bindings.items():
        print(f"  {name} = {value}")
    else:
      print("  (no variables)")
    return True

  if code == ":help":
    show_help()
    return True

  try:
    interpreter.interpret_statement(parser.parse_statement(line, line_num))
  except CalcParseError as e:
    error(str(e))
  except CalcRuntimeError as e:
    error(f"Runtime error: {e}")
  return True


def run_interactive_mode(args: argparse.Namespace) -> int:
  """Run Calc interactively; variables persist for the whole session"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if args.debug:
    print("Debug mode enabled")
  print()

  setup_readline()

  parser = create_debug_parser() if args.debug else create_parser()
  interpreter = make_interpreter(args)

  line_num = 0
  while True:
    try:
      line = input("calc> ")
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    line_num += 1
    if not handle_repl_line(line, line_num, parser, interpreter):
      break

  return 0


def main(argv: Optional[List[str]] = None) -> int:
  """Main entry point for Calc"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.script:
    return run_script_file(args.script, args)

  if args.interactive or sys.stdin.isatty():
    return run_interactive_mode(args)

  return run_source(sys.stdin.read(), args)


if __name__ == "__main__":
  sys.exit(main())
