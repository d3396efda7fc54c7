class Column(str):
    """Column name, usable anywhere PostgREST expects one."""

    def __repr__(self):
        return f"Column({self})"
