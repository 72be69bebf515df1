# SPDX-License-Identifier: MIT

# Display hints attached to convergence events. They are Rich color names so
# the terminal views can use them directly as styles.
CLASS_COLOR = "plum2"
EXAM_MILESTONE_COLOR = "gold1"
MILESTONE_COLOR = "deep_pink3"
EXPENSE_COLOR = "deep_pink3"
INCOME_COLOR = "gold1"
MOOD_COLOR = "hot_pink"

# View chrome
HEADER_COLOR = "dark_orange"
SUB_HEADER_COLOR = "sandy_brown"
OUTSIDE_MONTH_COLOR = "bright_black"
TODAY_COLOR = "bold hot_pink"
HIGH_PRIORITY_MARK_COLOR = "bold red"
