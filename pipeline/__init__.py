"""
Pipeline package for the Cloud Vision annotator.

Contains:
- `state`  : Typed `VisionState` definition
- `labels` : Ordered, duplicate-rejecting label mapping
- `tools`  : LangChain tools wrapping the Vision API calls
- `nodes`  : LangGraph node callables operating over `VisionState`
- `graph`  : StateGraph builder and compiled `pipeline`
"""
