import logging
import sys

__all__ = ['Logger']


LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARN,
    "err": logging.ERROR,
    "crit": logging.CRITICAL
}


class Logger():
    """
    Small logging facade used by the planners. Messages are routed to every configured handler.

    Attributes:
        name (str): Name of the underlying logging.Logger.
        handlers (list): Any of 'stdout' (plain print) or 'logging' (stdlib logging to stdout).
        level (str): One of 'debug', 'info', 'warn', 'err', 'crit'.
    """

    def __init__(self, name="prrt_planning", handlers=None, level='info'):
        self.name = name
        self.handlers = list(handlers) if handlers is not None else ['logging']
        if level not in LEVELS:
            raise ValueError("Level must be one of {}".format(list(LEVELS.keys())))
        self.level = level
        for handler in self.handlers:
            if handler not in ['stdout', 'logging']:
                raise ValueError("Handlers must be one of 'stdout' or 'logging'")
        self.logger = logging.getLogger(name)
        self.logger.setLevel(LEVELS[self.level])
        if 'logging' in self.handlers and not self.logger.handlers:
            formatter = logging.Formatter('[%(asctime)s - %(name)s - %(levelname)s] - %(message)s')
            handler = logging.StreamHandler(stream=sys.stdout)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.propagate = False

    def add_handler(self, handle):
        if handle not in ['stdout', 'logging']:
            raise ValueError("Handlers must be one of 'stdout' or 'logging'")
        self.handlers.append(handle)

    def _emit(self, level, msg):
        if LEVELS[level] < LEVELS[self.level]:
            return
        if 'stdout' in self.handlers:
            print(msg)
        if 'logging' in self.handlers:
            self.logger.log(LEVELS[level], msg)

    def debug(self, msg):
        self._emit('debug', msg)

    def info(self, msg):
        self._emit('info', msg)

    def warn(self, msg):
        self._emit('warn', msg)

    def err(self, msg):
        self._emit('err', msg)

    def crit(self, msg):
        self._emit('crit', msg)
