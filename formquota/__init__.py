"""
formquota - capacity-limited form submissions.

Forms hold ordered questions; each option may cap how many times it can be
selected. Submissions are admitted under a per-option lock so no option is
ever selected more often than its limit.
"""

__version__ = "1.0.0"
