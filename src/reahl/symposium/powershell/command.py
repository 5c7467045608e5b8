import re


parameter_name_pattern = re.compile('^[A-Za-z][A-Za-z0-9_]*$')
bare_script_path_pattern = re.compile('^[A-Za-z0-9_\\\\/.][A-Za-z0-9_:\\\\/.\\-]*$')

# PowerShell also treats the typographic quote characters as quotes.
double_quote_escaped_characters = frozenset('`$"“”„')
single_quote_characters = frozenset('\'‘’‚‛')


class DomainException(Exception):
    pass


class NamedArgument:
    def __init__(self, name, value, literal=False):
        self.name = name
        self.value = value
        self.literal = literal

    def render(self):
        if self.literal:
            return '-%s %s' % (self.name, single_quoted_value(self.value))
        return '-%s %s' % (self.name, double_quoted_value(self.value))

    def __repr__(self):
        return 'NamedArgument(%r, literal=%r)' % (self.name, self.literal)


def validated_parameter_name(name):
    if not isinstance(name, str) or not parameter_name_pattern.match(name):
        raise DomainException(
            'Invalid PowerShell parameter name: %r.' % (name,)
        )
    return name


def validated_argument_value(value, argument_name):
    if not isinstance(value, str):
        raise DomainException('%s must be a string.' % argument_name)
    for character in value:
        if character == '\t':
            continue
        if ord(character) < 32 or ord(character) == 127:
            raise DomainException(
                '%s must not contain control characters.' % argument_name
            )
    return value


def double_quoted_value(value):
    escaped_value = ''.join(
        '`' + character if character in double_quote_escaped_characters else character
        for character in validated_argument_value(value, 'Argument value')
    )
    return '"%s"' % escaped_value


def single_quoted_value(value):
    escaped_value = ''.join(
        character * 2 if character in single_quote_characters else character
        for character in validated_argument_value(value, 'Argument value')
    )
    return "'%s'" % escaped_value


def script_invocation(script_path):
    if not isinstance(script_path, str) or not script_path.strip():
        raise DomainException('script_path must be a non-empty string.')
    if bare_script_path_pattern.match(script_path):
        return script_path
    return '& %s' % single_quoted_value(script_path)


def build_script_command(script_path, named_arguments):
    command_parts = [script_invocation(script_path)]
    for named_argument in named_arguments:
        validated_parameter_name(named_argument.name)
        validated_argument_value(named_argument.value, named_argument.name)
        command_parts.append(named_argument.render())
    return ' '.join(command_parts)
