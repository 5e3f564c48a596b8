"""
Configuration Package for mov2mp4.

This package centralizes the static configuration settings for the application:
- Common settings like the logging format, the directory layout and job statuses.
- User-overridable values (directories, FFmpeg location, encoder arguments) read
  from 'config.user.yaml'.
- Video settings such as extensions and the FFmpeg argument template.
"""
