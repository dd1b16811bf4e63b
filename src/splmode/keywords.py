"""SPL keyword tables used by the classification rules."""

from __future__ import annotations

BUILTIN_COMMANDS: tuple[str, ...] = (
    "abstract", "accum", "addcoltotals", "addinfo", "addtotals", "analyzefields",
    "anomalies", "anomalousvalue", "anomalydetection", "append", "appendcols",
    "appendpipe", "arules", "associate", "audit", "autoregress", "bin", "bucket",
    "bucketdir", "chart", "cluster", "cofilter", "collect", "concurrency",
    "contingency", "convert", "correlate", "datamodel", "dbinspect", "dedup",
    "delete", "delta", "diff", "erex", "eval", "eventcount", "eventstats",
    "extract", "fieldformat", "fields", "fieldsummary", "filldown", "fillnull",
    "findtypes", "folderize", "foreach", "format", "from", "gauge", "gentimes",
    "geom", "geomfilter", "geostats", "head", "highlight", "history", "iconify",
    "input", "inputcsv", "inputlookup", "iplocation", "join", "kmeans", "kv",
    "kvform", "loadjob", "localize", "localop", "lookup", "makecontinuous",
    "makemv", "makeresults", "map", "mcollect", "metadata", "metasearch",
    "meventcollect", "mstats", "multikv", "multisearch", "mvcombine", "mvexpand",
    "nomv", "outlier", "outputcsv", "outputlookup", "outputtext", "overlap",
    "pivot", "predict", "rangemap", "rare", "redistribute", "regex", "relevancy",
    "reltime", "rename", "replace", "rest", "return", "reverse", "rex",
    "rtorder", "run", "savedsearch", "script", "scrub", "search", "searchtxn",
    "selfjoin", "sendemail", "set", "setfields", "sichart", "sirare", "sistats",
    "sitimechart", "sitop", "sort", "spath", "stats", "strcat", "streamstats",
    "table", "tags", "tail", "timechart", "timewrap", "top", "transaction",
    "transpose", "trendline", "tscollect", "tstats", "typeahead", "typelearner",
    "typer", "union", "uniq", "untable", "walklex", "where", "x11", "xmlkv",
    "xmlunescape", "xpath", "xyseries",
)  # fmt: skip

# Functions accepted by eval, where and fieldformat.
EVAL_FUNCTIONS: tuple[str, ...] = (
    "abs", "acos", "acosh", "asin", "asinh", "atan", "atan2", "atanh", "case",
    "ceil", "ceiling", "cidrmatch", "coalesce", "commands", "cos", "cosh",
    "exact", "exp", "false", "floor", "hypot", "if", "in", "ipmask", "isbool",
    "isint", "isnotnull", "isnull", "isnum", "isstr", "json_array",
    "json_extract", "json_keys", "json_object", "json_set", "json_valid", "len",
    "like", "ln", "log", "lookup", "lower", "ltrim", "match", "max", "md5",
    "min", "mvappend", "mvcount", "mvdedup", "mvfilter", "mvfind", "mvindex",
    "mvjoin", "mvmap", "mvrange", "mvsort", "mvzip", "mv_to_json_array", "now",
    "null", "nullif", "pi", "pow", "printf", "random", "relative_time",
    "replace", "round", "rtrim", "searchmatch", "sha1", "sha256", "sha512",
    "sigfig", "sin", "sinh", "spath", "split", "sqrt", "strftime", "strptime",
    "substr", "tan", "tanh", "time", "tonumber", "tostring", "trim", "true",
    "typeof", "upper", "urldecode", "validate",
)  # fmt: skip

# Aggregations for stats, chart, timechart and friends. ``eval`` is listed
# because stats accepts ``count(eval(...))``.
TRANSFORMING_FUNCTIONS: tuple[str, ...] = (
    "avg", "c", "count", "dc", "distinct_count", "earliest", "earliest_time",
    "estdc", "estdc_error", "eval", "exactperc", "first", "last", "latest",
    "latest_time", "list", "max", "mean", "median", "min", "mode", "p", "perc",
    "per_day", "per_hour", "per_minute", "per_second", "range", "rate",
    "rate_avg", "rate_sum", "stdev", "stdevp", "sum", "sumsq", "upperperc",
    "values", "var", "varp",
)  # fmt: skip

LANGUAGE_CONSTANTS: tuple[str, ...] = (
    "AND", "OR", "NOT", "XOR", "as", "AS", "by", "BY", "over", "OVER",
    "output", "OUTPUT", "outputnew", "OUTPUTNEW", "true", "false", "null",
    "TRUE", "FALSE", "NULL",
)  # fmt: skip
