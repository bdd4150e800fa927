from oradew_tasks.logging import Logger, LogLevel


class LoggerStub(Logger):
    """
    """

    def log(self, _level: LogLevel = LogLevel.INFO, *args, **kwargs) -> None:
        """
        """
        pass

    def push_level(self, level: LogLevel) -> None:
        """
        """
        pass

    def pop_level(self) -> LogLevel:
        """
        """
        return LogLevel.INFO


class RecordingLogger(LoggerStub):
    """
    Logger that records (level, text) pairs instead of printing.
    """

    def __init__(self):
        self.records: list[tuple[LogLevel, str]] = []

    def log(self, level: LogLevel = LogLevel.INFO, *args, **kwargs) -> None:
        self.records.append((level, " ".join(str(a) for a in args)))

    def messages(self, level: LogLevel | None = None) -> list[str]:
        return [text for lvl, text in self.records if level is None or lvl == level]


logger_stub = LoggerStub()
