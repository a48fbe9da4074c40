"""Exit status values used by built-ins and spawned stages."""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# POSIX reserves these two for exec failures
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
