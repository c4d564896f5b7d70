from yaspin.core import Yaspin


class Yaspin2(Yaspin):
    """Spinner that marks its text as completed on a clean exit."""

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.ok("✔")
        else:
            self.fail("✘")
        super().__exit__(exc_type, exc_value, traceback)


def spinner(text: str = "", **kwargs) -> Yaspin2:
    return Yaspin2(text=text, timer=True, **kwargs)
