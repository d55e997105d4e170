"""Handles interactive/command-line mode for the minilang interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """minilang interpreter shell."""
    intro = "minilang interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary minilang source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source = self._tmp_line + "\n" + line if self._tmp_line else line
            source, add_to_prev = self.sess.preprocess_line(source)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            first_line = self.line_num - source.count("\n")
            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not source:
                return

            self.sess.add(source, first_line)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the minilang interpreter!\n\n"
              "minilang is a small expression language with numbers, objects and functions. \n"
              "Declare variables with 'let' or 'const', for example 'let x = 5;' or \n"
              "'const origin = { x: 0, y: 0 };'. Arithmetic supports + - * / % with the \n"
              "usual precedence, and 'print(x, origin)' calls a builtin function.\n\n"
              "A line starting with 'exit', 'help' or 'EOF' is read as a shell command, not as code.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("'exit' takes no arguments, ignoring '{}'", arg)
        return True
