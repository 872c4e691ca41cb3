from themepack.cli import program

program.run()
