class InvalidDimensions(ValueError):
    """Raised when simulator inputs do not have compatible shapes.

    The usual cause is a discrimination vector whose length differs from
    the number of rows in the boundary-parameter table. Fix the input
    shapes and call again; nothing is produced when this is raised.
    """

    def __init__(self, message: str, **shapes: tuple[int, ...]) -> None:
        super().__init__(message)
        self.shapes = shapes
