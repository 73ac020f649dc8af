class EipAssignError(Exception):
    pass


class ConfigurationError(EipAssignError):
    pass


class InstanceEnvironmentError(EipAssignError):
    pass


class ProviderError(EipAssignError):
    pass


class NoEligibleAddressError(EipAssignError):
    def __init__(self, examined):
        super().__init__(f"No usable IPs found. Checked {examined} entries.")
        self.examined = examined


class InvalidPatternError(ConfigurationError):
    def __init__(self, pattern):
        super().__init__(f"invalid ip or cidr: {pattern}")
        self.pattern = pattern


class InvalidAddressError(ProviderError):
    def __init__(self, address):
        super().__init__(f"invalid ip: {address}")
        self.address = address
