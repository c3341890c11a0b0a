class NoActivePhrase(Exception):
    """
    No phrase is currently being asked
    """
    pass


class RoundComplete(Exception):
    """
    The last unrecognized phrase of the round has been answered
    """
    pass


class InvalidSettingValue(ValueError):
    """
    A value typed into the settings menu could not be accepted
    """
    pass


class ConfigError(Exception):
    """
    Could not load the configuration
    """
    pass


class DatabaseError(Exception):
    """
    Could not load the phrase database
    """
    pass
