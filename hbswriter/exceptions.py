class HbsWriterError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(HbsWriterError):
    # errors related to writer options and configuration files.
    pass

class DiscoveryError(HbsWriterError):
    # errors while resolving the source tree or matching files.
    pass

class TemplateError(HbsWriterError):
    # errors compiling or rendering a template.
    pass

class OutputError(HbsWriterError):
    # errors writing rendered output.
    pass
