###
# title: errors.py
# language: python3
#
# date: 2024-12-09
# license: GPLv3
# author: bue, willem
#
# descriprion:
#   exceptions raised by the pass checker and the test driver.
#   all of them are fatal for the run that raised them.
#####


class HarnessError(Exception):
    pass


class LookupFailure(HarnessError, KeyError):
    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f'lookup failed, key not found: {self.key!r}'


class DispatchFailure(HarnessError):
    def __init__(self, value):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return f'dispatch failed, no handler for: {self.value!r}'


class PassResultMismatch(HarnessError):
    def __init__(self, compiler_name, pass_name, expected, actual, program=None):
        super().__init__(compiler_name, pass_name, expected, actual)
        self.compiler_name = compiler_name
        self.pass_name = pass_name
        self.expected = expected
        self.actual = actual
        self.program = program

    def __str__(self):
        return (f'compiler {self.compiler_name}, pass {self.pass_name}: '
                f'expected {self.expected!r}, not {self.actual!r}')


class NonTextualFinalOutput(HarnessError):
    def __init__(self, source, value):
        super().__init__(source, value)
        self.source = source
        self.value = value

    def __str__(self):
        return (f'compiling {self.source} did not produce assembly text, '
                f'got {type(self.value).__name__}')


class ExternalToolFailure(HarnessError):
    def __init__(self, command, returncode=None):
        super().__init__(command, returncode)
        self.command = command
        self.returncode = returncode

    def __str__(self):
        s_command = ' '.join(str(s) for s in self.command)
        if self.returncode is None:
            return f'could not run: {s_command}'
        return f'{s_command} failed with exit code {self.returncode}'


class UnexpectedExitCode(HarnessError):
    def __init__(self, test_name, exit_code):
        super().__init__(test_name, exit_code)
        self.test_name = test_name
        self.exit_code = exit_code

    def __str__(self):
        if self.exit_code is None:
            return f'test {self.test_name} failed, binary could not be run'
        return f'test {self.test_name} failed, exit code {self.exit_code}'


class CompilerLoadFailure(HarnessError):
    def __init__(self, spec, reason):
        super().__init__(spec, reason)
        self.spec = spec
        self.reason = reason

    def __str__(self):
        return f'could not load compiler {self.spec}: {self.reason}'
