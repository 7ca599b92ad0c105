"""Lookup tables for the professional text transform.

Table order is application order. Entries are applied in a single pass, so a
formal replacement may itself be rewritten by a later rule.
"""

from types import MappingProxyType

# Casual verb -> formal verb (whole word, case-insensitive)
PROFESSIONAL_TERMS = MappingProxyType(
    {
        "fixed": "resolved",
        "broke": "identified issue with",
        "worked on": "developed",
        "did": "completed",
        "made": "implemented",
        "added": "integrated",
        "updated": "enhanced",
        "changed": "modified",
        "tested": "validated",
        "checked": "verified",
        "looked at": "analyzed",
        "went through": "reviewed",
        "tried": "attempted",
        "got": "acquired",
        "put": "placed",
        "took": "received",
        "found": "identified",
        "saw": "observed",
        "started": "initiated",
        "finished": "completed",
        "stopped": "concluded",
        "kept": "maintained",
        "let": "allowed",
        "helped": "assisted",
        "told": "informed",
        "asked": "requested",
        "said": "stated",
        "thought": "determined",
        "knew": "recognized",
        "felt": "demonstrated",
        "wanted": "required",
        "liked": "approved",
        "hated": "identified concerns with",
        "loved": "successfully implemented",
        "needed": "required",
        "used": "utilized",
        "had": "possessed",
        "gave": "provided",
        "came": "arrived",
        "went": "proceeded",
        "left": "departed",
        "stayed": "remained",
        "became": "transformed into",
        "seemed": "appeared",
        "looked": "appeared",
        "sounded": "indicated",
        "tasted": "indicated",
        "smelled": "suggested",
    }
)

# Casual phrase -> formal phrase (substring, case-insensitive)
PROFESSIONAL_PHRASES = MappingProxyType(
    {
        "figured out": "determined",
        "came up with": "developed",
        "went ahead": "proceeded",
        "ended up": "resulted in",
        "turned out": "demonstrated",
        "picked up": "acquired",
        "set up": "configured",
        "cleaned up": "optimized",
        "messed up": "encountered issue with",
        "screwed up": "identified error in",
        "fucked up": "encountered significant issue with",
        "kicked off": "initiated",
        "wrapped up": "completed",
        "knocked out": "accomplished",
        "pulled off": "successfully executed",
        "brought up": "raised",
        "brought in": "introduced",
        "brought out": "highlighted",
        "brought down": "reduced",
        "brought back": "restored",
        "brought forward": "advanced",
        "brought together": "consolidated",
        "brought up to speed": "updated",
        "brought to attention": "highlighted",
        "brought to light": "revealed",
        "sort of": "somewhat",
        "kind of": "somewhat",
        "pretty much": "essentially",
        "basically": "fundamentally",
        "actually": "specifically",
        "really": "significantly",
        "super": "extremely",
        "awesome": "excellent",
        "great": "excellent",
        "good": "satisfactory",
        "bad": "suboptimal",
        "terrible": "requiring improvement",
        "horrible": "requiring significant improvement",
        "amazing": "exceptional",
        "incredible": "remarkable",
        "unbelievable": "noteworthy",
        "crazy": "unusual",
        "insane": "remarkable",
        "wild": "unexpected",
        "weird": "unusual",
        "strange": "atypical",
        "funny": "interesting",
        "cool": "innovative",
        "hot": "current",
        "cold": "inactive",
        "fast": "efficient",
        "slow": "requiring optimization",
        "big": "substantial",
        "small": "minor",
        "huge": "significant",
        "tiny": "minimal",
    }
)

# Lowercase header -> canonical header (exact match)
PROFESSIONAL_HEADERS = MappingProxyType(
    {
        "bug fix": "Issue Resolution",
        "bug fixes": "Issue Resolution",
        "feature": "Feature Implementation",
        "feature work": "Feature Development",
        "ui work": "User Interface Enhancement",
        "ui": "User Interface",
        "frontend": "Frontend Development",
        "backend": "Backend Development",
        "api": "API Development",
        "database": "Database Management",
        "testing": "Quality Assurance",
        "deployment": "Deployment Management",
        "docs": "Documentation",
        "documentation": "Documentation Enhancement",
        "meeting": "Team Coordination",
        "meetings": "Team Coordination",
        "review": "Code Review",
        "reviews": "Code Review",
        "planning": "Project Planning",
        "research": "Technical Research",
        "analysis": "Technical Analysis",
        "optimization": "Performance Optimization",
        "refactoring": "Code Refactoring",
        "security": "Security Implementation",
        "maintenance": "System Maintenance",
        "setup": "System Configuration",
        "configuration": "System Configuration",
        "integration": "System Integration",
        "migration": "Data Migration",
        "update": "System Update",
        "updates": "System Updates",
        "upgrade": "System Upgrade",
        "upgrades": "System Upgrades",
        "client work": "Client Deliverables",
        "client update": "Client Communication",
        "client communication": "Client Communication",
        "sprint work": "Sprint Development",
        "sprint": "Sprint Activities",
        "daily work": "Daily Development",
        "misc": "Miscellaneous Tasks",
        "miscellaneous": "Miscellaneous Tasks",
        "general": "General Development",
        "other": "Additional Tasks",
    }
)
