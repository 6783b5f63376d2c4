from pkgrel.cli.app import run

run()
