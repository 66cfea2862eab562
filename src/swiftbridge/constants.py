SOURCEKIT_LSP_SERVER_ID = "sourcekit-lsp"
SWIFT_DEBUG_ADAPTER_NAME = "Swift"

# used when sourcekit-lsp is neither configured nor on the search path
XCRUN_PATH = "/usr/bin/xcrun"

LLDB_DAP_NAME = "lldb-dap"
# toolchain locations checked (in order) before falling back to a bare lookup
LLDB_DAP_TOOLCHAIN_PATHS = (
    "/Applications/Xcode.app/Contents/Developer/usr/bin/lldb-dap",
    "/Library/Developer/CommandLineTools/usr/bin/lldb-dap",
)

SWIFTBRIDGE_FILE_ENCODING = "utf-8"
SWIFTBRIDGE_LOG_FORMAT = "%(levelname)-5s %(asctime)-15s %(name)s:%(funcName)s:%(lineno)d - %(message)s"
