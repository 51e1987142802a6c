class JumpShardError(Exception):
    pass


class InvalidBucketCountError(JumpShardError, ValueError):
    pass


class InvalidSeedError(JumpShardError, ValueError):
    pass


class UnknownDigestError(JumpShardError, LookupError):
    pass


class InvalidGrowthError(JumpShardError, ValueError):
    pass


class PlanDecodeError(JumpShardError):
    pass
