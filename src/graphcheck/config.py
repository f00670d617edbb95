"""Default configuration settings for the graphcheck tool."""

DEFAULT_CONFIG = {
	# Project layout
	"project": {
		# Root of the Java sources, relative to the project directory
		"source_dir": "src/main/java",
		# Glob patterns, matched below the source root, of files skipped while
		# scanning. Package directories are matched too, so keep these specific.
		"exclude": [],
	},
	# Javadoc tag configuration
	"tags": {
		# Tags are written as @<prefix>-graph and @<prefix>-graph-ignore
		"prefix": "aicontext",
	},
	# Graph validation
	"validate": {
		# Whether the validate command checks anything at all
		"enabled": True,
	},
	# Suggested graph generation
	"suggest": {
		# Where suggested graphs are written, relative to the project directory
		"output_dir": "target/suggested-graphs",
	},
}
