from responsive_images.cli.main import cli

cli()
