"""Package for the fritzaha command line tool."""
