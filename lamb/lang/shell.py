"""Handles interactive/command-line mode for the lamb interpreter. Uses cmd as backend."""

import cmd

from lamb.pure.lexical import lex


class Shell(cmd.Cmd):
    """lamb interpreter shell."""
    intro = "lamb interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lamb input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                if not lex(line):
                    return  # only whitespace and comments

                self.sess.add(line, self.line_num)
                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lamb interpreter!\n\n"
              "lamb is a tiny expression language with integers, floats, strings and \n"
              "single-parameter closures. Forms: 'define NAME EXPR', 'let (NAME EXPR) EXPR', \n"
              "'lambda (NAME) EXPR' and '(OPERATOR OPERAND ...)'. Built-ins: + - * / \n"
              "string-append string<? string=? not = <\n\n"
              "Try it out by typing 'define inc lambda (x) (+ x 1)'. Next, try typing \n"
              "'(inc 41)', giving '42' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
