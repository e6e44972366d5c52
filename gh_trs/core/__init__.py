"""
Core gh-trs operations.

- config_io: reading and writing registration files
- raw_url: GitHub file URL normalisation
- inspect: workflow language detection
- template: ``make-template``
- validator: ``validate``
- test_runner: ``test``
- trs_response, publisher: ``publish``
"""
