"""briefsmith - prompt orchestration for short-form AI video briefs"""

__version__ = "1.0.0"
