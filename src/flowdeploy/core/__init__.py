"""
flowdeploy Core

Shell execution, compose invocation and the unified error system.
"""
