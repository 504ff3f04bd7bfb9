"""Domain records and validation rules, free of framework imports."""
