from cpu_check.cli import run

run()
