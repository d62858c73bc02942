from rich.console import Console

console = Console(soft_wrap=True, stderr=True)
print = console.print


def print_success(msg: str):
    print(":white_check_mark:", msg)
