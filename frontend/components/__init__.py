"""
Streamlit UI components for the IoT Robot Console.

This package contains the dashboard pages for:
- Live dashboard and robot control
- Alert, command, obstacle and robot status logs
- RFID tag and work plan management
- Collected measurements per work plan
"""
