"""
Names of the capabilities a DataSource can advertise through supports().
"""

# Data can be returned as full numpy arrays in memory
CAPABILITY_MATERIALIZED = 'materialized'

# Data can be iterated multiple times (for residuals, fitted values)
CAPABILITY_REPEATABLE = 'repeatable'

# Columns carry names (tabular sources such as CSV files or DataFrames)
CAPABILITY_NAMED_COLUMNS = 'named_columns'

ALL_CAPABILITIES = frozenset({
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
    CAPABILITY_NAMED_COLUMNS,
})

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_REPEATABLE',
    'CAPABILITY_NAMED_COLUMNS',
    'ALL_CAPABILITIES',
]
