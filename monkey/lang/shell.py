"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend.

Input is buffered until it is complete (balanced parentheses, braces and quotes), then parsed and evaluated as one
program in the session's Environment. Shell commands (help, env, reset, exit) shadow Monkey identifiers of the same
name at the start of a new input, but not on continuation lines.
"""

import cmd

from monkey.lang.environment import Environment


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "This is the Monkey programming language!\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # shown while an input is unfinished
    primary_prompt = ">> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self.pending = ""        # unfinished input so far
        self.pending_start = 0   # line number the unfinished input started on
        self.line_num = 0

    def onecmd(self, line):
        """While an input is unfinished, every line but EOF continues it, even one starting with a command name."""
        if self.pending and line != "EOF":
            return self.default(line.strip())
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary Monkey code once the input is complete."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self.pending:
                self.pending_start = self.line_num

            source, unfinished = self.sess.preprocess_line(line, self.pending)
            if unfinished:
                self.pending = source
                self.prompt = self.secondary_prompt
                return

            self.pending = ""
            self.prompt = self.primary_prompt
            self.execute(source, self.pending_start)

    def execute(self, source, line_num):
        self.sess.add(source, line_num)
        self.sess.run()

        if self.sess.results:
            print(self.sess.pop())

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep an unfinished input going."""
        if self.pending:
            return self.default("")
        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, first-class functions and closures. \n"
              "Try it out by typing 'let add = fn(x, y) { x + y; };'. This will bind a \n"
              "function to the name 'add'. Next, try typing 'add(1, 2)', giving 3 as the \n"
              "result.\n\n"
              "Commands: 'env' lists bindings, 'reset' forgets them, 'exit' or Ctrl-D leaves.")

    def do_env(self, arg):
        """Lists the names bound in the session, with their values."""
        for name, value in sorted(self.sess.env.store.items()):
            print(f"{name} = {value}")

    def do_reset(self, arg):
        """Forgets every binding and any unfinished input."""
        self.sess.env = Environment()
        self.pending = ""
        self.prompt = self.primary_prompt

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
