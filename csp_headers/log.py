# csp_headers/log.py
from rich.console import Console
from rich.markup import escape
from rich.traceback import install

console = Console(stderr=True)
install(show_locals=False)

def info(msg): console.log(f"[bold cyan]INFO[/] {escape(str(msg))}")
def warn(msg): console.log(f"[bold yellow]WARN[/] {escape(str(msg))}")
def err(msg):  console.log(f"[bold red]ERR[/] {escape(str(msg))}")

def plural(n: int, one: str, many: str) -> str:
    return f"{n} {one if n == 1 else many}"
